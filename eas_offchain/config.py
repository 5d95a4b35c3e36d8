# eas_offchain/config.py
"""
Runtime configuration, read from the environment on each call.

Environment variables (all optional):
    EAS_OFFCHAIN_BASE_URL            Scheme + host prefixed to share URLs,
                                     e.g. https://sepolia.easscan.org.
                                     Default: empty (relative URL).
    EAS_OFFCHAIN_COMPRESSION_LEVEL   zlib level used when zipping packages.
                                     Default: 9 (maximum ratio).
"""

import os

from eas_offchain.core.encoding import MAX_COMPRESSION_LEVEL

SHARE_URL_PATH = "/offchain/url/#attestation="


def get_base_url() -> str:
    return os.environ.get("EAS_OFFCHAIN_BASE_URL", "").strip().rstrip("/")


def get_compression_level() -> int:
    raw = os.environ.get("EAS_OFFCHAIN_COMPRESSION_LEVEL", "").strip()
    if not raw:
        return MAX_COMPRESSION_LEVEL
    try:
        level = int(raw)
    except ValueError:
        raise ValueError(f"EAS_OFFCHAIN_COMPRESSION_LEVEL must be an integer, got {raw!r}") from None
    if not 0 <= level <= MAX_COMPRESSION_LEVEL:
        raise ValueError(f"EAS_OFFCHAIN_COMPRESSION_LEVEL must be between 0 and 9, got {level}")
    return level
