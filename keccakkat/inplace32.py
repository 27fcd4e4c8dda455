"""Keccak-p[1600] state kept in bit-interleaved form, with byte-level access."""

from __future__ import annotations

from collections.abc import Iterator

from keccakkat.interleave import (
    HALF_LANE_COUNT,
    from_bit_interleaving,
    permute_interleaved,
    to_bit_interleaving,
)
from keccakkat.keccak import LANE_COUNT, LANE_SIZE, MAX_ROUNDS, STATE_SIZE

_MASK64 = (1 << 64) - 1


def _segments(offset: int, data: bytes) -> Iterator[tuple[int, int, bytes]]:
    """Split ``data`` placed at ``offset`` into (lane, offset in lane, chunk) pieces."""
    position = 0
    while position < len(data):
        lane, in_lane = divmod(offset + position, LANE_SIZE)
        size = min(LANE_SIZE - in_lane, len(data) - position)
        yield lane, in_lane, data[position:position + size]
        position += size


class KeccakP1600Interleaved:
    """A Keccak-p[1600] state stored as 50 bit-interleaved 32-bit words.

    The byte interface presents the state in its usual little-endian layout;
    the interleaving is an internal representation.
    """

    def __init__(self) -> None:
        self.halves: list[int] = [0] * HALF_LANE_COUNT

    def initialize(self) -> None:
        """Reset the whole state to zero."""
        self.halves = [0] * HALF_LANE_COUNT

    @staticmethod
    def _check_range(offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > STATE_SIZE:
            raise ValueError(
                f"byte range [{offset}, {offset + length}) is outside the {STATE_SIZE}-byte state"
            )

    def _xor_lane(self, lane: int, value: int) -> None:
        even, odd = to_bit_interleaving(value)
        self.halves[2 * lane] ^= even
        self.halves[2 * lane + 1] ^= odd

    def _and_lane(self, lane: int, value: int) -> None:
        even, odd = to_bit_interleaving(value)
        self.halves[2 * lane] &= even
        self.halves[2 * lane + 1] &= odd

    def _lane_bytes(self, lane: int) -> bytes:
        value = from_bit_interleaving(self.halves[2 * lane], self.halves[2 * lane + 1])
        return value.to_bytes(LANE_SIZE, "little")

    def add_byte(self, byte: int, offset: int) -> None:
        """XOR one byte into the state at ``offset``."""
        if not 0 <= byte <= 0xFF:
            raise ValueError("byte value must be in range 0..255")
        self._check_range(offset, 1)
        lane, shift = divmod(offset, LANE_SIZE)
        self._xor_lane(lane, byte << (8 * shift))

    def add_bytes(self, data: bytes, offset: int = 0) -> None:
        """XOR ``data`` into the state starting at byte ``offset``."""
        data = bytes(data)
        self._check_range(offset, len(data))
        for lane, in_lane, chunk in _segments(offset, data):
            self._xor_lane(lane, int.from_bytes(chunk, "little") << (8 * in_lane))

    def overwrite_bytes(self, data: bytes, offset: int = 0) -> None:
        """Replace state bytes starting at ``offset`` with ``data``."""
        data = bytes(data)
        self._check_range(offset, len(data))
        for lane, in_lane, chunk in _segments(offset, data):
            mask = ((1 << (8 * len(chunk))) - 1) << (8 * in_lane)
            self._and_lane(lane, ~mask & _MASK64)
            self._xor_lane(lane, int.from_bytes(chunk, "little") << (8 * in_lane))

    def overwrite_with_zeroes(self, byte_count: int) -> None:
        """Set the first ``byte_count`` bytes of the state to zero."""
        self._check_range(0, byte_count)
        self.overwrite_bytes(bytes(byte_count), 0)

    def permute(self, nrounds: int) -> None:
        """Apply the last ``nrounds`` rounds of the permutation."""
        self.halves = permute_interleaved(self.halves, nrounds)

    def permute_12rounds(self) -> None:
        """Apply Keccak-p[1600, 12]."""
        self.permute(12)

    def permute_24rounds(self) -> None:
        """Apply Keccak-f[1600]."""
        self.permute(MAX_ROUNDS)

    def extract_bytes(self, offset: int, length: int) -> bytes:
        """Return ``length`` state bytes starting at ``offset``."""
        self._check_range(offset, length)
        return b"".join(
            self._lane_bytes(lane)[in_lane:in_lane + len(chunk)]
            for lane, in_lane, chunk in _segments(offset, bytes(length))
        )

    def extract_and_add_bytes(self, data: bytes, offset: int = 0) -> bytes:
        """Return ``data`` XORed with the state bytes starting at ``offset``."""
        data = bytes(data)
        key = self.extract_bytes(offset, len(data))
        return bytes(k ^ d for k, d in zip(key, data))

    def to_bytes(self) -> bytes:
        """Return the 200-byte little-endian serialisation of the state."""
        return b"".join(self._lane_bytes(lane) for lane in range(LANE_COUNT))