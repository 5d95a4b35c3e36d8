# eas_offchain/compact/compactor.py
"""
Fixed-position tuple form of a shareable attestation package.

Slot layout (never reordered; new versions only give meaning to trailing slots):

     0 domain.version             9 recipient, "0" for the zero address
     1 domain.chainId            10 time
     2 domain.verifyingContract  11 expirationTime
     3 signature.r               12 refUID, "0" for the zero hash
     4 signature.s               13 revocable
     5 signature.v               14 data
     6 signer                    15 reserved, always 0
     7 uid                       16 message version (None for Legacy)
     8 schema                    17 salt (None before V2)
"""

import logging
from typing import Any, Sequence

from eas_offchain.compact.legacy import normalize_signature
from eas_offchain.core.canon import to_js_number
from eas_offchain.core.errors import MalformedPackageError
from eas_offchain.core.types import (
    ZERO_ADDRESS,
    ZERO_HASH,
    AttestationMessage,
    AttestationShareablePackage,
    CompactTuple,
    EIP712Domain,
    Signature,
    SignedOffchainAttestation,
)
from eas_offchain.core.versions import OffchainAttestationVersion, schema_for

logger = logging.getLogger(__name__)

COMPACT_TUPLE_LENGTH = 18
# Producers that predate the version/salt slots emit shorter arrays
MIN_COMPACT_TUPLE_LENGTH = 16

SENTINEL = "0"
RESERVED = 0

CHAIN_ID_SLOT = 1
VERSION_SLOT = 16

_STRING_SLOTS = {
    0: "domain.version",
    2: "domain.verifyingContract",
    3: "signature.r",
    4: "signature.s",
    6: "signer",
    7: "uid",
    8: "message.schema",
    9: "message.recipient",
    12: "message.refUID",
    14: "message.data",
}
_INTEGER_SLOTS = {
    1: "domain.chainId",
    5: "signature.v",
    10: "message.time",
    11: "message.expirationTime",
}


def _message_version_tag(sig: SignedOffchainAttestation):
    if sig.message.version is not None:
        return int(sig.message.version)
    if sig.version != OffchainAttestationVersion.LEGACY:
        return int(sig.version)
    return None


def compact(pkg: AttestationShareablePackage) -> CompactTuple:
    """Flatten a package (either signature shape) into its 18-slot tuple."""
    sig = normalize_signature(pkg.sig)
    msg = sig.message

    compacted = (
        sig.domain.version,
        sig.domain.chain_id,
        sig.domain.verifying_contract,
        sig.signature.r,
        sig.signature.s,
        sig.signature.v,
        pkg.signer,
        sig.uid,
        msg.schema,
        SENTINEL if msg.recipient == ZERO_ADDRESS else msg.recipient,
        to_js_number(msg.time),
        to_js_number(msg.expiration_time),
        SENTINEL if msg.ref_uid == ZERO_HASH else msg.ref_uid,
        msg.revocable,
        msg.data,
        RESERVED,
        _message_version_tag(sig),
        msg.salt,
    )
    logger.debug("Compacted attestation %s (version slot %r)", sig.uid, compacted[VERSION_SLOT])
    return compacted


def _check_slots(compacted: Sequence[Any]) -> CompactTuple:
    if isinstance(compacted, (str, bytes)) or not isinstance(compacted, Sequence):
        raise MalformedPackageError(f"Compact package must be an array, got {type(compacted).__name__}")

    size = len(compacted)
    if not MIN_COMPACT_TUPLE_LENGTH <= size <= COMPACT_TUPLE_LENGTH:
        raise MalformedPackageError(
            f"Compact package must have {MIN_COMPACT_TUPLE_LENGTH}-{COMPACT_TUPLE_LENGTH} slots, got {size}"
        )
    padded = tuple(compacted) + (None,) * (COMPACT_TUPLE_LENGTH - size)

    for slot, label in _STRING_SLOTS.items():
        if not isinstance(padded[slot], str):
            raise MalformedPackageError(f"Slot {slot} ({label}) must be a string, got {padded[slot]!r}")
    for slot, label in _INTEGER_SLOTS.items():
        value = padded[slot]
        # chain id and times may arrive as decimal strings when they exceed the safe range
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise MalformedPackageError(f"Slot {slot} ({label}) must be an integer, got {value!r}")
        if isinstance(value, str) and not (value.isascii() and value.isdigit()):
            raise MalformedPackageError(f"Slot {slot} ({label}) must be a decimal integer, got {value!r}")
    if not isinstance(padded[13], bool):
        raise MalformedPackageError(f"Slot 13 (message.revocable) must be a boolean, got {padded[13]!r}")
    if padded[17] is not None and not isinstance(padded[17], str):
        raise MalformedPackageError(f"Slot 17 (message.salt) must be a string, got {padded[17]!r}")
    return padded


def decompact(compacted: Sequence[Any]) -> AttestationShareablePackage:
    """
    Rebuild a package from its tuple form.

    The version slot alone selects the typed-data schema; an unknown tag raises
    UnsupportedVersionError. The result always uses the nested signature shape.
    """
    c = _check_slots(compacted)
    schema = schema_for(c[VERSION_SLOT])
    version = schema.version

    sig = SignedOffchainAttestation(
        version=version,
        domain=EIP712Domain(
            version=c[0],
            chain_id=int(c[CHAIN_ID_SLOT]),
            verifying_contract=c[2],
        ),
        primary_type=schema.primary_type,
        types=schema.types,
        signature=Signature(r=c[3], s=c[4], v=int(c[5])),
        uid=c[7],
        message=AttestationMessage(
            schema=c[8],
            recipient=ZERO_ADDRESS if c[9] == SENTINEL else c[9],
            time=int(c[10]),
            expiration_time=int(c[11]),
            revocable=c[13],
            ref_uid=ZERO_HASH if c[12] == SENTINEL else c[12],
            data=c[14],
            version=None if version == OffchainAttestationVersion.LEGACY else int(version),
            salt=c[17],
        ),
    )
    logger.debug("Decompacted attestation %s as %s", sig.uid, version.name)
    return AttestationShareablePackage(sig=sig, signer=c[6])
