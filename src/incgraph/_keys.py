"""Memo key policies.

A node caches one result per argument key. The key is derived from the
argument vector by a `KeyPolicy`:

- `KeyPolicy.TRUNCATE` converts every argument to an unsigned 64-bit integer
  the way a saturating float-to-integer cast does. Arguments that differ only
  in their fractional part share a key, e.g. ``[1.4]`` and ``[1.9]``.
- `KeyPolicy.EXACT` uses the IEEE-754 bit pattern of every argument.
"""

import math
import struct
from collections.abc import Sequence
from enum import StrEnum, auto
from typing import TypeAlias

U64_MAX = 2**64 - 1

MemoKey: TypeAlias = tuple[int, ...]


class KeyPolicy(StrEnum):
    """How an argument vector is turned into a memo key."""

    TRUNCATE = auto()  # Saturating truncation to u64 (lossy)
    EXACT = auto()  # Bit pattern of the double


def truncate_to_u64(value: float) -> int:
    """Truncate a float to an unsigned 64-bit integer, saturating at both ends.

    NaN and negative values map to 0, values too large (including +inf) map to
    ``2**64 - 1``.

    Example:
        >>> truncate_to_u64(1.9)
        1
        >>> truncate_to_u64(-3.5)
        0

    """
    if math.isnan(value) or value <= 0:
        return 0
    if value >= 2.0**64:
        return U64_MAX
    return int(value)


def float_bits(value: float) -> int:
    """Return the IEEE-754 binary64 bit pattern of a float as an integer."""
    (bits,) = struct.unpack("<Q", struct.pack("<d", value))
    return bits


def make_key(args: Sequence[float], policy: KeyPolicy = KeyPolicy.TRUNCATE) -> MemoKey:
    """Compute the memo key of an argument vector under the given policy."""
    match policy:
        case KeyPolicy.TRUNCATE:
            return tuple(truncate_to_u64(float(a)) for a in args)
        case KeyPolicy.EXACT:
            return tuple(float_bits(float(a)) for a in args)
    msg = f"Unsupported key policy: {policy!r}"
    raise ValueError(msg)
