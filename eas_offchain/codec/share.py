# eas_offchain/codec/share.py
"""
Text and URL encodings of a shareable attestation package.

package -> 18-slot tuple -> canonical JSON -> zlib deflate -> base64url
"""

import json
import logging
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit

from eas_offchain import config
from eas_offchain.compact.compactor import CHAIN_ID_SLOT, compact, decompact
from eas_offchain.core.canon import canonical_json, stringify_bigints
from eas_offchain.core.encoding import b64url_decode, b64url_encode, deflate, inflate
from eas_offchain.core.errors import MalformedPackageError
from eas_offchain.core.types import AttestationShareablePackage, CompactTuple

logger = logging.getLogger(__name__)

SHARE_URL_PARAM = "attestation"


def zip_tuple(compacted: CompactTuple, level: Optional[int] = None) -> str:
    """Serialize, compress and base64url-encode a compact tuple."""
    if level is None:
        level = config.get_compression_level()
    # chain id is a uint256 and always travels as a decimal string
    jsoned = canonical_json(stringify_bigints(compacted, always=(CHAIN_ID_SLOT,)))
    zipped = deflate(jsoned, level)
    logger.debug("Zipped %d JSON bytes into %d deflated bytes", len(jsoned), len(zipped))
    return b64url_encode(zipped)


def unzip_tuple(text: str) -> CompactTuple:
    """Inverse of zip_tuple. Decoding and inflate errors propagate unchanged."""
    json_str = inflate(b64url_decode(text)).decode("utf-8")
    compacted = json.loads(json_str)
    if not isinstance(compacted, list):
        raise MalformedPackageError(f"Expected a JSON array, got {type(compacted).__name__}")
    return tuple(compacted)


def encode_to_text(pkg: AttestationShareablePackage) -> str:
    return zip_tuple(compact(pkg))


def decode_from_text(text: str) -> AttestationShareablePackage:
    return decompact(unzip_tuple(text))


def build_share_url(pkg: AttestationShareablePackage, base_url: Optional[str] = None) -> str:
    """
    Share link for a package: /offchain/url/#attestation=<percent-encoded text>.
    Prefixed with ``base_url`` (or EAS_OFFCHAIN_BASE_URL) when one is set.
    """
    if base_url is None:
        base_url = config.get_base_url()
    encoded = quote(encode_to_text(pkg), safe="")
    return f"{base_url.rstrip('/')}{config.SHARE_URL_PATH}{encoded}"


def parse_share_url(url: str) -> AttestationShareablePackage:
    """Decode the package carried in the fragment of a share URL."""
    fragment = urlsplit(url.strip()).fragment
    values = parse_qs(fragment, keep_blank_values=True).get(SHARE_URL_PARAM)
    if not values or not values[0]:
        raise MalformedPackageError(f"No '{SHARE_URL_PARAM}' parameter in URL fragment: {url}")
    return decode_from_text(values[0])
