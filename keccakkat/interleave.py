"""Keccak-p[1600] on bit-interleaved state: each lane split into 32-bit even and odd words."""

from __future__ import annotations

from collections.abc import Sequence

from keccakkat.keccak import _RHO_OFFSETS, LANE_COUNT, MAX_ROUNDS, ROUND_CONSTANTS

HALF_LANE_COUNT = 2 * LANE_COUNT

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1


def rol32(value: int, offset: int) -> int:
    """Rotate a 32-bit word left by ``offset`` bits."""
    value &= _MASK32
    offset %= 32
    if offset == 0:
        return value
    return ((value << offset) | (value >> (32 - offset))) & _MASK32


def _spread(word: int) -> int:
    """Move the even bits of a word into its low half and the odd bits into its high half."""
    for mask, shift in ((0x22222222, 1), (0x0C0C0C0C, 2), (0x00F000F0, 4), (0x0000FF00, 8)):
        temp = (word ^ (word >> shift)) & mask
        word = word ^ temp ^ (temp << shift)
    return word & _MASK32


def _gather(word: int) -> int:
    """Inverse of :func:`_spread`."""
    for mask, shift in ((0x0000FF00, 8), (0x00F000F0, 4), (0x0C0C0C0C, 2), (0x22222222, 1)):
        temp = (word ^ (word >> shift)) & mask
        word = word ^ temp ^ (temp << shift)
    return word & _MASK32


def to_bit_interleaving(lane: int) -> tuple[int, int]:
    """Split a 64-bit lane into (even, odd): its even-indexed and odd-indexed bits."""
    if not 0 <= lane <= _MASK64:
        raise ValueError("lane must be an unsigned 64-bit value")
    low = _spread(lane & _MASK32)
    high = _spread(lane >> 32)
    even = (low & 0x0000FFFF) | ((high << 16) & _MASK32)
    odd = (low >> 16) | (high & 0xFFFF0000)
    return even, odd


def from_bit_interleaving(even: int, odd: int) -> int:
    """Rebuild a 64-bit lane from its even and odd 32-bit words."""
    if not (0 <= even <= _MASK32 and 0 <= odd <= _MASK32):
        raise ValueError("even and odd words must be unsigned 32-bit values")
    low = (even & 0x0000FFFF) | ((odd << 16) & _MASK32)
    high = (even >> 16) | (odd & 0xFFFF0000)
    return _gather(low) | (_gather(high) << 32)


INTERLEAVED_ROUND_CONSTANTS = tuple(to_bit_interleaving(rc) for rc in ROUND_CONSTANTS)


def _rol_pair(even: int, odd: int, offset: int) -> tuple[int, int]:
    """Rotate an interleaved lane left by ``offset`` bits of the 64-bit lane."""
    if offset % 2 == 0:
        return rol32(even, offset // 2), rol32(odd, offset // 2)
    return rol32(odd, (offset + 1) // 2), rol32(even, (offset - 1) // 2)


def permute_interleaved(halves: Sequence[int], nrounds: int = MAX_ROUNDS) -> list[int]:
    """Apply the last ``nrounds`` rounds of Keccak-f[1600] to an interleaved state.

    ``halves`` holds 50 words: the even then odd word of each of the 25 lanes.
    """
    if len(halves) != HALF_LANE_COUNT:
        raise ValueError(f"expected {HALF_LANE_COUNT} half-lanes, got {len(halves)}")
    if not 0 <= nrounds <= MAX_ROUNDS:
        raise ValueError(f"number of rounds must be between 0 and {MAX_ROUNDS}")
    even = [word & _MASK32 for word in halves[0::2]]
    odd = [word & _MASK32 for word in halves[1::2]]
    for rc_even, rc_odd in INTERLEAVED_ROUND_CONSTANTS[MAX_ROUNDS - nrounds:]:
        # theta
        col_even = [even[x] ^ even[x + 5] ^ even[x + 10] ^ even[x + 15] ^ even[x + 20] for x in range(5)]
        col_odd = [odd[x] ^ odd[x + 5] ^ odd[x + 10] ^ odd[x + 15] ^ odd[x + 20] for x in range(5)]
        d_even = [col_even[(x - 1) % 5] ^ rol32(col_odd[(x + 1) % 5], 1) for x in range(5)]
        d_odd = [col_odd[(x - 1) % 5] ^ col_even[(x + 1) % 5] for x in range(5)]
        even = [word ^ d_even[i % 5] for i, word in enumerate(even)]
        odd = [word ^ d_odd[i % 5] for i, word in enumerate(odd)]
        # rho and pi
        b_even = [0] * LANE_COUNT
        b_odd = [0] * LANE_COUNT
        for i, (e, o) in enumerate(zip(even, odd)):
            x, y = i % 5, i // 5
            target = y + 5 * ((2 * x + 3 * y) % 5)
            b_even[target], b_odd[target] = _rol_pair(e, o, _RHO_OFFSETS[i])
        # chi
        even = [
            b_even[i] ^ (~b_even[(i + 1) % 5 + 5 * (i // 5)] & b_even[(i + 2) % 5 + 5 * (i // 5)] & _MASK32)
            for i in range(LANE_COUNT)
        ]
        odd = [
            b_odd[i] ^ (~b_odd[(i + 1) % 5 + 5 * (i // 5)] & b_odd[(i + 2) % 5 + 5 * (i // 5)] & _MASK32)
            for i in range(LANE_COUNT)
        ]
        # iota
        even[0] ^= rc_even
        odd[0] ^= rc_odd
    result: list[int] = []
    for e, o in zip(even, odd):
        result.extend((e, o))
    return result