# eas_offchain/__init__.py
"""
eas-offchain — compact, compressed, URL-safe encoding of signed EAS offchain attestations.

Packages are flattened into a fixed 18-slot tuple whose layout survives schema-version
changes, then deflated and base64url-encoded for share links. Decoding rebuilds the exact
typed-data schema (Legacy, V1 or V2) from the version tag carried in the tuple.
"""

__version__ = "0.1.0-dev"

from eas_offchain.codec.share import (
    build_share_url,
    decode_from_text,
    encode_to_text,
    parse_share_url,
    unzip_tuple,
    zip_tuple,
)
from eas_offchain.compact.compactor import compact, decompact
from eas_offchain.compact.legacy import is_legacy_flat_signature, upgrade_legacy_signature
from eas_offchain.core.errors import MalformedPackageError, OffchainPackageError, UnsupportedVersionError
from eas_offchain.core.types import (
    ZERO_ADDRESS,
    ZERO_HASH,
    AttestationMessage,
    AttestationShareablePackage,
    EIP712Domain,
    Signature,
    SignedOffchainAttestation,
    SignedOffchainAttestationV1,
)
from eas_offchain.core.versions import OffchainAttestationVersion, TypedDataField, schema_for

__all__ = [
    "build_share_url",
    "encode_to_text",
    "decode_from_text",
    "parse_share_url",
    "zip_tuple",
    "unzip_tuple",
    "compact",
    "decompact",
    "is_legacy_flat_signature",
    "upgrade_legacy_signature",
    "schema_for",
    "OffchainAttestationVersion",
    "TypedDataField",
    "AttestationMessage",
    "AttestationShareablePackage",
    "EIP712Domain",
    "Signature",
    "SignedOffchainAttestation",
    "SignedOffchainAttestationV1",
    "ZERO_ADDRESS",
    "ZERO_HASH",
    "OffchainPackageError",
    "UnsupportedVersionError",
    "MalformedPackageError",
]
