"""Contratos del Core para fuentes de metadata.

Por qué:
- `MetadataFetcher` y `MetadataSchema` (Protocol) los implementan los adapters.
- El resolver depende de estos contratos, no del fetcher HTTP concreto.
"""
