"""Logical metadata fields reported to the registry.

This module centralizes the names of the attributes a Eureka
`AmazonInfo` datacenter block expects. Keeping them in the domain layer
lets the resolver, the metadata sources and the CLI share a single source
of truth without importing each other.
"""

from __future__ import annotations

from enum import Enum


class MetadataField(str, Enum):
    """Named output attributes of a resolved metadata record."""

    AMI_ID = "ami-id"
    INSTANCE_ID = "instance-id"
    INSTANCE_TYPE = "instance-type"
    LOCAL_IPV4 = "local-ipv4"
    LOCAL_HOSTNAME = "local-hostname"
    AVAILABILITY_ZONE = "availability-zone"
    PUBLIC_HOSTNAME = "public-hostname"
    PUBLIC_IPV4 = "public-ipv4"
    MAC = "mac"
    VPC_ID = "vpc-id"
    ACCOUNT_ID = "accountId"

    @classmethod
    def network_fields(cls) -> tuple["MetadataField", ...]:
        """Fields sourced from the first network interface."""

        return (cls.LOCAL_IPV4, cls.LOCAL_HOSTNAME, cls.PUBLIC_HOSTNAME, cls.PUBLIC_IPV4, cls.MAC)

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value.replace("-", " ").replace("Id", " id").capitalize()
