"""Dominio: campos lógicos, reglas de extracción y modelos del registro.

Por qué:
- Aquí viven los nombres de campo (`MetadataField`), las reglas puras que
  leen el documento crudo y los modelos Pydantic del resultado.
- El dominio no conoce HTTP ni la CLI: solo el documento y el registro.
"""
