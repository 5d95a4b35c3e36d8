# eas_offchain/core/encoding.py
import base64
import zlib

MAX_COMPRESSION_LEVEL = 9


def b64url_encode(data: bytes) -> str:
    """Encode bytes to base64url (no padding, URL-safe)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(s: str) -> bytes:
    """
    Decode base64url string back to bytes.
    Standard-alphabet input ('+', '/') from older share links decodes too.
    """
    s = s.strip().replace("+", "-").replace("/", "_")
    # Restore padding
    padding = len(s) % 4
    if padding:
        s += "=" * (4 - padding)
    return base64.urlsafe_b64decode(s)


def deflate(data: bytes, level: int = MAX_COMPRESSION_LEVEL) -> bytes:
    """zlib-wrapped deflate stream, the format pako.deflate emits."""
    return zlib.compress(data, level)


def inflate(data: bytes) -> bytes:
    return zlib.decompress(data)
