"""Tests for memo key policies."""

import math

import pytest

from incgraph import KeyPolicy, make_key
from incgraph._keys import U64_MAX, float_bits, truncate_to_u64


class TestTruncateToU64:
    """Tests for the saturating truncation."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.0, 0),
            (1.4, 1),
            (1.9, 1),
            (2.0, 2),
            (123456.999, 123456),
            (-0.5, 0),
            (-3.0, 0),
            (math.nan, 0),
            (math.inf, U64_MAX),
            (-math.inf, 0),
            (2.0**64, U64_MAX),
            (2.0**63, 2**63),
        ],
    )
    def test_values(self, value: float, expected: int) -> None:
        assert truncate_to_u64(value) == expected


class TestMakeKey:
    """Tests for make_key."""

    def test_empty_args(self) -> None:
        assert make_key([]) == ()

    def test_truncate_is_default(self) -> None:
        assert make_key([1.4, 2.9]) == (1, 2)

    def test_fractional_parts_collide(self) -> None:
        assert make_key([1.4]) == make_key([1.9])

    def test_negative_values_collide_with_zero(self) -> None:
        assert make_key([-3.0]) == make_key([0.0])

    def test_exact_distinguishes_fractions(self) -> None:
        assert make_key([1.4], KeyPolicy.EXACT) != make_key([1.9], KeyPolicy.EXACT)

    def test_exact_distinguishes_signed_zero(self) -> None:
        assert make_key([0.0], KeyPolicy.EXACT) != make_key([-0.0], KeyPolicy.EXACT)

    def test_exact_uses_bit_pattern(self) -> None:
        assert make_key([1.0], KeyPolicy.EXACT) == (0x3FF0000000000000,)
        assert float_bits(-2.0) == 0xC000000000000000

    def test_length_matters(self) -> None:
        assert make_key([0.0]) != make_key([0.0, 0.0])

    def test_accepts_integers(self) -> None:
        assert make_key([3, 4]) == (3, 4)
