# eas_offchain/compact/legacy.py
"""
Adapter for the flat signature shape produced before signatures were nested.

A flat signed attestation carries ``r``, ``s`` and ``v`` beside its typed data.
It is upgraded to the nested shape and tagged Version1; nested input passes through.
"""

import logging
from typing import Any, Mapping

from eas_offchain.core.types import (
    AnySignedAttestation,
    Signature,
    SignedOffchainAttestation,
    SignedOffchainAttestationV1,
)
from eas_offchain.core.versions import OffchainAttestationVersion

logger = logging.getLogger(__name__)

_FLAT_SIGNATURE_KEYS = ("v", "r", "s")


def is_legacy_flat_signature(obj: Any) -> bool:
    """True when ``obj`` exposes v, r and s at its top level (mapping or flat dataclass)."""
    if isinstance(obj, SignedOffchainAttestationV1):
        return True
    if isinstance(obj, SignedOffchainAttestation):
        return False
    if not isinstance(obj, Mapping):
        return False
    return all(key in obj for key in _FLAT_SIGNATURE_KEYS)


def upgrade_legacy_signature(sig: SignedOffchainAttestationV1) -> SignedOffchainAttestation:
    """Return a new nested-shape attestation tagged Version1."""
    logger.debug("Upgrading flat signature of attestation %s to the nested V1 shape", sig.uid)
    return SignedOffchainAttestation(
        version=OffchainAttestationVersion.VERSION1,
        domain=sig.domain,
        primary_type=sig.primary_type,
        types=sig.types,
        signature=Signature(r=sig.r, s=sig.s, v=sig.v),
        uid=sig.uid,
        message=sig.message,
    )


def normalize_signature(sig: AnySignedAttestation) -> SignedOffchainAttestation:
    if isinstance(sig, SignedOffchainAttestationV1):
        return upgrade_legacy_signature(sig)
    return sig
