"""Keccak-p[1600] permutation on a state of 25 little-endian 64-bit lanes."""

from __future__ import annotations

from collections.abc import Sequence

STATE_SIZE = 200
LANE_SIZE = 8
LANE_COUNT = 25
MAX_ROUNDS = 24

_MASK64 = (1 << 64) - 1

# Rotation offsets indexed by x + 5 * y.
_RHO_OFFSETS = (
    0, 1, 62, 28, 27,
    36, 44, 6, 55, 20,
    3, 10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2, 61, 56, 14,
)


def _round_constants() -> tuple[int, ...]:
    """Derive the 24 iota constants from the LFSR x^8 + x^6 + x^5 + x^4 + 1."""
    constants = []
    register = 0x01
    for _ in range(MAX_ROUNDS):
        constant = 0
        for j in range(7):
            if register & 1:
                constant ^= 1 << ((1 << j) - 1)
            if register & 0x80:
                register = ((register << 1) ^ 0x71) & 0xFF
            else:
                register = (register << 1) & 0xFF
        constants.append(constant)
    return tuple(constants)


ROUND_CONSTANTS = _round_constants()


def _rol64(value: int, offset: int) -> int:
    return ((value << offset) | (value >> (64 - offset))) & _MASK64


def permute_lanes(lanes: Sequence[int], nrounds: int = MAX_ROUNDS) -> list[int]:
    """Apply the last ``nrounds`` rounds of Keccak-f[1600] and return the new lanes."""
    if len(lanes) != LANE_COUNT:
        raise ValueError(f"expected {LANE_COUNT} lanes, got {len(lanes)}")
    if not 0 <= nrounds <= MAX_ROUNDS:
        raise ValueError(f"number of rounds must be between 0 and {MAX_ROUNDS}")
    a = [lane & _MASK64 for lane in lanes]
    for constant in ROUND_CONSTANTS[MAX_ROUNDS - nrounds:]:
        # theta
        columns = [a[x] ^ a[x + 5] ^ a[x + 10] ^ a[x + 15] ^ a[x + 20] for x in range(5)]
        deltas = [columns[(x - 1) % 5] ^ _rol64(columns[(x + 1) % 5], 1) for x in range(5)]
        a = [lane ^ deltas[i % 5] for i, lane in enumerate(a)]
        # rho and pi
        b = [0] * LANE_COUNT
        for i, lane in enumerate(a):
            x, y = i % 5, i // 5
            b[y + 5 * ((2 * x + 3 * y) % 5)] = _rol64(lane, _RHO_OFFSETS[i])
        # chi
        a = [
            b[i] ^ (~b[(i + 1) % 5 + 5 * (i // 5)] & b[(i + 2) % 5 + 5 * (i // 5)])
            for i in range(LANE_COUNT)
        ]
        # iota
        a[0] ^= constant
    return a


def _lanes_from_bytes(data: bytes) -> list[int]:
    return [
        int.from_bytes(data[pos:pos + LANE_SIZE], "little")
        for pos in range(0, len(data), LANE_SIZE)
    ]


class KeccakP1600:
    """A single Keccak-p[1600] state with byte-level access."""

    def __init__(self) -> None:
        self.lanes: list[int] = [0] * LANE_COUNT

    def initialize(self) -> None:
        """Reset every lane to zero."""
        self.lanes = [0] * LANE_COUNT

    def to_bytes(self) -> bytes:
        """Return the 200-byte little-endian serialisation of the state."""
        return b"".join(lane.to_bytes(LANE_SIZE, "little") for lane in self.lanes)

    def _load(self, data: bytes) -> None:
        self.lanes = _lanes_from_bytes(data)

    @staticmethod
    def _check_range(offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > STATE_SIZE:
            raise ValueError(
                f"byte range [{offset}, {offset + length}) is outside the {STATE_SIZE}-byte state"
            )

    def add_byte(self, byte: int, offset: int) -> None:
        """XOR one byte into the state at ``offset``."""
        if not 0 <= byte <= 0xFF:
            raise ValueError("byte value must be in range 0..255")
        self._check_range(offset, 1)
        lane, shift = divmod(offset, LANE_SIZE)
        self.lanes[lane] ^= byte << (8 * shift)

    def add_bytes(self, data: bytes, offset: int = 0) -> None:
        """XOR ``data`` into the state starting at byte ``offset``."""
        data = bytes(data)
        self._check_range(offset, len(data))
        state = bytearray(self.to_bytes())
        end = offset + len(data)
        state[offset:end] = bytes(s ^ d for s, d in zip(state[offset:end], data))
        self._load(bytes(state))

    def overwrite_bytes(self, data: bytes, offset: int = 0) -> None:
        """Replace state bytes starting at ``offset`` with ``data``."""
        data = bytes(data)
        self._check_range(offset, len(data))
        state = bytearray(self.to_bytes())
        state[offset:offset + len(data)] = data
        self._load(bytes(state))

    def overwrite_with_zeroes(self, byte_count: int) -> None:
        """Set the first ``byte_count`` bytes of the state to zero."""
        self._check_range(0, byte_count)
        state = bytearray(self.to_bytes())
        state[:byte_count] = bytes(byte_count)
        self._load(bytes(state))

    def permute(self, nrounds: int) -> None:
        """Apply the last ``nrounds`` rounds of the permutation."""
        self.lanes = permute_lanes(self.lanes, nrounds)

    def permute_12rounds(self) -> None:
        """Apply Keccak-p[1600, 12]."""
        self.permute(12)

    def permute_24rounds(self) -> None:
        """Apply Keccak-f[1600]."""
        self.permute(24)

    def extract_bytes(self, offset: int, length: int) -> bytes:
        """Return ``length`` state bytes starting at ``offset``."""
        self._check_range(offset, length)
        return self.to_bytes()[offset:offset + length]

    def extract_and_add_bytes(self, data: bytes, offset: int = 0) -> bytes:
        """Return ``data`` XORed with the state bytes starting at ``offset``."""
        data = bytes(data)
        key = self.extract_bytes(offset, len(data))
        return bytes(k ^ d for k, d in zip(key, data))

    def fast_loop_absorb(self, lane_count: int, data: bytes, nrounds: int = MAX_ROUNDS) -> int:
        """Absorb whole blocks of ``lane_count`` lanes, permuting after each.

        Returns the number of bytes consumed.
        """
        if not 0 < lane_count <= LANE_COUNT:
            raise ValueError(f"lane count must be between 1 and {LANE_COUNT}")
        data = bytes(data)
        block_size = lane_count * LANE_SIZE
        consumed = 0
        while len(data) - consumed >= block_size:
            block = _lanes_from_bytes(data[consumed:consumed + block_size])
            for index, lane in enumerate(block):
                self.lanes[index] ^= lane
            self.lanes = permute_lanes(self.lanes, nrounds)
            consumed += block_size
        return consumed