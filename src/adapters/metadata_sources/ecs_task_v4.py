"""Fuente de metadata: ECS task metadata endpoint v4 (Fargate 1.4.0).

Documentación del esquema:
https://docs.aws.amazon.com/AmazonECS/latest/userguide/task-metadata-endpoint-v4-fargate.html

Notas:
- Fargate no expone DNS ni IP públicas distintas: public-* replica local-*.
- El modo de red en Fargate es siempre `awsvpc`.
- El account id sale del 5º segmento del `ContainerARN`
  (`arn:aws:ecs:us-west-2:111122223333:container/...`).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from core.config import METADATA_URI_ENV
from core.domain.fields import MetadataField
from core.domain.rules import constant, delimited_segment, lookup_first_entry_key, lookup_key
from core.interfaces.fetcher import ExtractionRule

INSTANCE_TYPE = "FARGATE"
NETWORK_MODE = "awsvpc"

# Se aceptan ARNs con 5 o más segmentos; los de contenedor traen 6.
ARN_MIN_SEGMENTS = 5

_local_ipv4 = lookup_first_entry_key("Networks", "IPv4Addresses")
_private_dns = lookup_first_entry_key("Networks", "PrivateDNSName")

_RULES: Mapping[MetadataField, ExtractionRule] = MappingProxyType(
    {
        MetadataField.AMI_ID: lookup_key("ImageID"),
        MetadataField.INSTANCE_ID: lookup_key("DockerId"),
        MetadataField.INSTANCE_TYPE: constant(INSTANCE_TYPE),
        MetadataField.LOCAL_IPV4: _local_ipv4,
        MetadataField.LOCAL_HOSTNAME: _private_dns,
        MetadataField.AVAILABILITY_ZONE: lookup_key("AvailabilityZone"),
        MetadataField.PUBLIC_HOSTNAME: _private_dns,
        MetadataField.PUBLIC_IPV4: _local_ipv4,
        MetadataField.MAC: lookup_first_entry_key("Networks", "MACAddress"),
        MetadataField.VPC_ID: constant(NETWORK_MODE),
        MetadataField.ACCOUNT_ID: delimited_segment("ContainerARN", index=4, min_segments=ARN_MIN_SEGMENTS),
    }
)


class EcsTaskMetadataV4:
    """Esquema v4 del task metadata endpoint."""

    version = "v4"
    env_var = METADATA_URI_ENV

    def rules(self) -> Mapping[MetadataField, ExtractionRule]:
        return _RULES
