# tests/conftest.py
import pytest

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
from eas_offchain.core.versions import OffchainAttestationVersion, schema_for

SIGNER = "0x5A2a0bB1A1bf2A22f4d8ED0d47e64bcEb4c0BE5b"
RECIPIENT = "0xFD50b031E778fAb33DfD2Fc3Ca66a1EeF0652165"
EAS_SEPOLIA = "0xC2679fBD37d54388Ce493F1DB75320D236e1815e"
SCHEMA_UID = "0x" + "00" * 32
UID = "0x" + "5e" * 32
R = "0x" + "1a" * 32
S = "0x" + "2b" * 32
SALT = "0x" + "abcd" * 16


def make_package(version: OffchainAttestationVersion, **message_overrides) -> AttestationShareablePackage:
    schema = schema_for(version)
    fields = dict(
        schema=SCHEMA_UID,
        recipient=ZERO_ADDRESS,
        time=1000,
        expiration_time=0,
        revocable=True,
        ref_uid=ZERO_HASH,
        data="0x1234",
        version=None if version == OffchainAttestationVersion.LEGACY else int(version),
        salt=SALT if version == OffchainAttestationVersion.VERSION2 else None,
    )
    fields.update(message_overrides)

    sig = SignedOffchainAttestation(
        version=version,
        domain=EIP712Domain(version="1.2.0", chain_id=11155111, verifying_contract=EAS_SEPOLIA),
        primary_type=schema.primary_type,
        types=schema.types,
        signature=Signature(r=R, s=S, v=27),
        uid=UID,
        message=AttestationMessage(**fields),
    )
    return AttestationShareablePackage(sig=sig, signer=SIGNER)


@pytest.fixture
def legacy_package() -> AttestationShareablePackage:
    return make_package(OffchainAttestationVersion.LEGACY)


@pytest.fixture
def v1_package() -> AttestationShareablePackage:
    return make_package(OffchainAttestationVersion.VERSION1, recipient=RECIPIENT, time=1700000000)


@pytest.fixture
def v2_package() -> AttestationShareablePackage:
    return make_package(
        OffchainAttestationVersion.VERSION2,
        recipient=RECIPIENT,
        time=1717171717,
        expiration_time=1893456000,
        revocable=False,
        ref_uid="0x" + "77" * 32,
        data="0x" + "00ff" * 40,
    )


@pytest.fixture
def flat_v1_sig() -> SignedOffchainAttestationV1:
    """Flat r/s/v signature with no version tag anywhere in it."""
    schema = schema_for(OffchainAttestationVersion.VERSION1)
    return SignedOffchainAttestationV1(
        domain=EIP712Domain(version="1.0.1", chain_id=1, verifying_contract=EAS_SEPOLIA),
        primary_type=schema.primary_type,
        types=schema.types,
        r=R,
        s=S,
        v=28,
        uid=UID,
        message=AttestationMessage(
            schema=SCHEMA_UID,
            recipient=RECIPIENT,
            time=1650000000,
            expiration_time=0,
            revocable=True,
            ref_uid=ZERO_HASH,
            data="0x",
        ),
    )


@pytest.fixture
def flat_v1_package(flat_v1_sig) -> AttestationShareablePackage:
    return AttestationShareablePackage(sig=flat_v1_sig, signer=SIGNER)


@pytest.fixture
def package_factory():
    """Build a package of any version with message fields overridden."""
    return make_package
