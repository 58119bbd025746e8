from __future__ import annotations

from services.common.hashes import sha256_text


_MANTISSA_BITS = 53


def stable_unit_value(key: str) -> float:
    """Map ``key`` to a float in [0, 1) that is identical across processes and versions."""
    digest = sha256_text(key)
    value = int(digest[:16], 16) >> (64 - _MANTISSA_BITS)
    return value / float(1 << _MANTISSA_BITS)
