# eas_offchain/core/types.py
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from eas_offchain.core.errors import MalformedPackageError
from eas_offchain.core.versions import OffchainAttestationVersion, TypedDataField

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_HASH = "0x" + "00" * 32
EAS_DOMAIN_NAME = "EAS Attestation"

# 18 positional slots; the trailing two (version, salt) may be None
CompactTuple = Tuple[Any, ...]


def _require(d: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in d:
        raise MalformedPackageError(f"Missing '{key}' in {where}")
    return d[key]


@dataclass(frozen=True)
class EIP712Domain:
    """Typed-data signing domain of an EAS deployment."""
    version: str
    chain_id: int
    verifying_contract: str
    name: str = EAS_DOMAIN_NAME

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "EIP712Domain":
        return cls(
            name=d.get("name", EAS_DOMAIN_NAME),
            version=_require(d, "version", "domain"),
            chain_id=int(_require(d, "chainId", "domain")),
            verifying_contract=_require(d, "verifyingContract", "domain"),
        )


@dataclass(frozen=True)
class Signature:
    r: str
    s: str
    v: int

    def to_dict(self) -> dict:
        return {"r": self.r, "s": self.s, "v": self.v}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Signature":
        return cls(
            r=_require(d, "r", "signature"),
            s=_require(d, "s", "signature"),
            v=int(_require(d, "v", "signature")),
        )


@dataclass(frozen=True)
class AttestationMessage:
    """The signed EIP-712 message body of an offchain attestation."""
    schema: str
    recipient: str
    time: int
    expiration_time: int
    revocable: bool
    ref_uid: str
    data: str
    version: Optional[int] = None   # absent for Legacy
    salt: Optional[str] = None      # V2 onward

    def to_dict(self) -> dict:
        d = {
            "schema": self.schema,
            "recipient": self.recipient,
            "time": self.time,
            "expirationTime": self.expiration_time,
            "revocable": self.revocable,
            "refUID": self.ref_uid,
            "data": self.data,
        }
        if self.version is not None:
            d["version"] = self.version
        if self.salt is not None:
            d["salt"] = self.salt
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "AttestationMessage":
        version = d.get("version")
        revocable = _require(d, "revocable", "message")
        if not isinstance(revocable, bool):
            raise MalformedPackageError(f"message.revocable must be a boolean, got {revocable!r}")
        return cls(
            schema=_require(d, "schema", "message"),
            recipient=_require(d, "recipient", "message"),
            time=int(_require(d, "time", "message")),
            expiration_time=int(_require(d, "expirationTime", "message")),
            revocable=revocable,
            ref_uid=_require(d, "refUID", "message"),
            data=_require(d, "data", "message"),
            version=int(version) if version is not None else None,
            salt=d.get("salt"),
        )


def _types_to_dict(types: Mapping[str, Tuple[TypedDataField, ...]]) -> dict:
    return {key: [f.to_dict() for f in fields] for key, fields in types.items()}


def _types_from_dict(d: Mapping[str, Any]) -> Dict[str, Tuple[TypedDataField, ...]]:
    return {
        key: tuple(TypedDataField(name=f["name"], type=f["type"]) for f in fields)
        for key, fields in d.items()
    }


@dataclass(frozen=True)
class SignedOffchainAttestation:
    """Signed typed data in the current nested-signature shape."""
    version: OffchainAttestationVersion
    domain: EIP712Domain
    primary_type: str
    types: Dict[str, Tuple[TypedDataField, ...]]
    signature: Signature
    uid: str
    message: AttestationMessage

    def to_dict(self) -> dict:
        return {
            "version": int(self.version),
            "domain": self.domain.to_dict(),
            "primaryType": self.primary_type,
            "types": _types_to_dict(self.types),
            "signature": self.signature.to_dict(),
            "uid": self.uid,
            "message": self.message.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SignedOffchainAttestation":
        return cls(
            version=OffchainAttestationVersion.resolve(d.get("version")),
            domain=EIP712Domain.from_dict(_require(d, "domain", "sig")),
            primary_type=_require(d, "primaryType", "sig"),
            types=_types_from_dict(_require(d, "types", "sig")),
            signature=Signature.from_dict(_require(d, "signature", "sig")),
            uid=_require(d, "uid", "sig"),
            message=AttestationMessage.from_dict(_require(d, "message", "sig")),
        )


@dataclass(frozen=True)
class SignedOffchainAttestationV1:
    """Flat pre-V2 shape: r, s and v sit beside the typed data, no version tag."""
    domain: EIP712Domain
    primary_type: str
    types: Dict[str, Tuple[TypedDataField, ...]]
    r: str
    s: str
    v: int
    uid: str
    message: AttestationMessage

    def to_dict(self) -> dict:
        return {
            "domain": self.domain.to_dict(),
            "primaryType": self.primary_type,
            "types": _types_to_dict(self.types),
            "r": self.r,
            "s": self.s,
            "v": self.v,
            "uid": self.uid,
            "message": self.message.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SignedOffchainAttestationV1":
        return cls(
            domain=EIP712Domain.from_dict(_require(d, "domain", "sig")),
            primary_type=_require(d, "primaryType", "sig"),
            types=_types_from_dict(_require(d, "types", "sig")),
            r=_require(d, "r", "sig"),
            s=_require(d, "s", "sig"),
            v=int(_require(d, "v", "sig")),
            uid=_require(d, "uid", "sig"),
            message=AttestationMessage.from_dict(_require(d, "message", "sig")),
        )


AnySignedAttestation = Union[SignedOffchainAttestation, SignedOffchainAttestationV1]


@dataclass(frozen=True)
class AttestationShareablePackage:
    """Signed typed data plus the address that signed it."""
    sig: AnySignedAttestation
    signer: str

    def to_dict(self) -> dict:
        return {"sig": self.sig.to_dict(), "signer": self.signer}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "AttestationShareablePackage":
        from eas_offchain.compact.legacy import is_legacy_flat_signature

        raw_sig = _require(d, "sig", "package")
        if not isinstance(raw_sig, Mapping):
            raise MalformedPackageError(f"sig must be an object, got {type(raw_sig).__name__}")
        if is_legacy_flat_signature(raw_sig):
            sig = SignedOffchainAttestationV1.from_dict(raw_sig)
        elif "signature" in raw_sig:
            sig = SignedOffchainAttestation.from_dict(raw_sig)
        else:
            raise MalformedPackageError("sig carries neither a nested signature nor flat r/s/v")
        return cls(sig=sig, signer=_require(d, "signer", "package"))
