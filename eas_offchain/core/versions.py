# eas_offchain/core/versions.py
"""
Registry of the EIP-712 "Attest" schemas, one per offchain attestation version.

Legacy signatures predate the version tag. V1 adds a leading ``version`` field,
V2 keeps it and appends a trailing ``salt``.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Tuple

from eas_offchain.core.errors import UnsupportedVersionError

ATTEST_TYPE_KEY = "Attest"


@dataclass(frozen=True)
class TypedDataField:
    name: str
    type: str

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type}


class OffchainAttestationVersion(IntEnum):
    LEGACY = 0
    VERSION1 = 1
    VERSION2 = 2

    @classmethod
    def resolve(cls, tag: Any) -> "OffchainAttestationVersion":
        """Map a raw tag to a version. Falsy tags mean Legacy."""
        if not tag:
            return cls.LEGACY
        if isinstance(tag, bool) or not isinstance(tag, int):
            raise UnsupportedVersionError(tag)
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedVersionError(tag) from None


BASE_ATTEST_FIELDS: Tuple[TypedDataField, ...] = (
    TypedDataField("schema", "bytes32"),
    TypedDataField("recipient", "address"),
    TypedDataField("time", "uint64"),
    TypedDataField("expirationTime", "uint64"),
    TypedDataField("revocable", "bool"),
    TypedDataField("refUID", "bytes32"),
    TypedDataField("data", "bytes"),
)

VERSION_FIELD = TypedDataField("version", "uint16")
SALT_FIELD = TypedDataField("salt", "bytes32")


@dataclass(frozen=True)
class AttestSchema:
    version: OffchainAttestationVersion
    primary_type: str
    fields: Tuple[TypedDataField, ...]

    @property
    def types(self) -> Dict[str, Tuple[TypedDataField, ...]]:
        """Typed-data ``types`` mapping as it appears in the signed payload."""
        return {ATTEST_TYPE_KEY: self.fields}


def legacy_schema() -> AttestSchema:
    return AttestSchema(OffchainAttestationVersion.LEGACY, "Attestation", BASE_ATTEST_FIELDS)


def v1_schema() -> AttestSchema:
    return AttestSchema(
        OffchainAttestationVersion.VERSION1,
        ATTEST_TYPE_KEY,
        (VERSION_FIELD,) + BASE_ATTEST_FIELDS,
    )


def v2_schema() -> AttestSchema:
    return AttestSchema(
        OffchainAttestationVersion.VERSION2,
        ATTEST_TYPE_KEY,
        (VERSION_FIELD,) + BASE_ATTEST_FIELDS + (SALT_FIELD,),
    )


_SCHEMA_BUILDERS: Dict[OffchainAttestationVersion, Callable[[], AttestSchema]] = {
    OffchainAttestationVersion.LEGACY: legacy_schema,
    OffchainAttestationVersion.VERSION1: v1_schema,
    OffchainAttestationVersion.VERSION2: v2_schema,
}


def schema_for(tag: Any) -> AttestSchema:
    """
    Return the Attest schema for a version tag (raw value or enum member).
    Raises UnsupportedVersionError for anything outside Legacy/V1/V2.
    """
    return _SCHEMA_BUILDERS[OffchainAttestationVersion.resolve(tag)]()
