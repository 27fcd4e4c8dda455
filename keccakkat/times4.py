"""Four independent Keccak-p[1600] states driven together."""

from __future__ import annotations

from keccakkat.keccak import LANE_COUNT, LANE_SIZE, MAX_ROUNDS, STATE_SIZE, KeccakP1600

PARALLELISM = 4
STATES_SIZE = PARALLELISM * STATE_SIZE


def _check_lane_layout(lane_count: int, lane_offset: int) -> None:
    if not 0 <= lane_count <= LANE_COUNT:
        raise ValueError(f"lane count must be between 0 and {LANE_COUNT}")
    if lane_offset < 0:
        raise ValueError("lane offset must not be negative")


def _layout_size(lane_count: int, lane_offset: int) -> int:
    """Bytes spanned by four interleaved blocks of ``lane_count`` lanes, ``lane_offset`` lanes apart."""
    return (lane_offset * (PARALLELISM - 1) + lane_count) * LANE_SIZE


class KeccakP1600Times4:
    """Four Keccak-p[1600] instances that are permuted together.

    Single-instance operations take an instance index from 0 to 3; the
    ``*_all`` operations work on a buffer where instance ``i`` starts
    ``i * lane_offset`` lanes into the data.
    """

    def __init__(self) -> None:
        self.instances: list[KeccakP1600] = [KeccakP1600() for _ in range(PARALLELISM)]

    def _instance(self, instance: int) -> KeccakP1600:
        if not 0 <= instance < PARALLELISM:
            raise ValueError(f"instance index must be between 0 and {PARALLELISM - 1}")
        return self.instances[instance]

    def initialize_all(self) -> None:
        """Reset all four states to zero."""
        for state in self.instances:
            state.initialize()

    def add_byte(self, instance: int, byte: int, offset: int) -> None:
        """XOR one byte into one instance at ``offset``."""
        self._instance(instance).add_byte(byte, offset)

    def add_bytes(self, instance: int, data: bytes, offset: int = 0) -> None:
        """XOR ``data`` into one instance starting at ``offset``."""
        self._instance(instance).add_bytes(data, offset)

    def _blocks(self, data: bytes, lane_count: int, lane_offset: int) -> list[bytes]:
        _check_lane_layout(lane_count, lane_offset)
        data = bytes(data)
        needed = _layout_size(lane_count, lane_offset)
        if len(data) < needed:
            raise ValueError(f"need at least {needed} bytes of data, got {len(data)}")
        size = lane_count * LANE_SIZE
        return [
            data[i * lane_offset * LANE_SIZE:i * lane_offset * LANE_SIZE + size]
            for i in range(PARALLELISM)
        ]

    def add_lanes_all(self, data: bytes, lane_count: int, lane_offset: int) -> None:
        """XOR ``lane_count`` lanes into each instance from the interleaved buffer."""
        for state, block in zip(self.instances, self._blocks(data, lane_count, lane_offset)):
            state.add_bytes(block, 0)

    def overwrite_bytes(self, instance: int, data: bytes, offset: int = 0) -> None:
        """Replace bytes of one instance starting at ``offset``."""
        self._instance(instance).overwrite_bytes(data, offset)

    def overwrite_lanes_all(self, data: bytes, lane_count: int, lane_offset: int) -> None:
        """Replace the first ``lane_count`` lanes of each instance from the interleaved buffer."""
        for state, block in zip(self.instances, self._blocks(data, lane_count, lane_offset)):
            state.overwrite_bytes(block, 0)

    def overwrite_with_zeroes(self, instance: int, byte_count: int) -> None:
        """Zero the first ``byte_count`` bytes of one instance."""
        self._instance(instance).overwrite_with_zeroes(byte_count)

    def permute_all(self, nrounds: int) -> None:
        """Apply the last ``nrounds`` rounds of the permutation to every instance."""
        if not 0 <= nrounds <= MAX_ROUNDS:
            raise ValueError(f"number of rounds must be between 0 and {MAX_ROUNDS}")
        for state in self.instances:
            state.permute(nrounds)

    def permute_all_4rounds(self) -> None:
        """Apply Keccak-p[1600, 4] to every instance."""
        self.permute_all(4)

    def permute_all_6rounds(self) -> None:
        """Apply Keccak-p[1600, 6] to every instance."""
        self.permute_all(6)

    def permute_all_12rounds(self) -> None:
        """Apply Keccak-p[1600, 12] to every instance."""
        self.permute_all(12)

    def permute_all_24rounds(self) -> None:
        """Apply Keccak-f[1600] to every instance."""
        self.permute_all(MAX_ROUNDS)

    def extract_bytes(self, instance: int, offset: int, length: int) -> bytes:
        """Return ``length`` bytes of one instance starting at ``offset``."""
        return self._instance(instance).extract_bytes(offset, length)

    def extract_lanes_all(self, lane_count: int, lane_offset: int) -> bytes:
        """Return the first ``lane_count`` lanes of each instance in the interleaved layout.

        Bytes between the blocks are zero.
        """
        _check_lane_layout(lane_count, lane_offset)
        output = bytearray(_layout_size(lane_count, lane_offset))
        size = lane_count * LANE_SIZE
        for i, state in enumerate(self.instances):
            start = i * lane_offset * LANE_SIZE
            output[start:start + size] = state.extract_bytes(0, size)
        return bytes(output)

    def extract_and_add_bytes(self, instance: int, data: bytes, offset: int = 0) -> bytes:
        """Return ``data`` XORed with bytes of one instance starting at ``offset``."""
        return self._instance(instance).extract_and_add_bytes(data, offset)

    def extract_and_add_lanes_all(self, data: bytes, lane_count: int, lane_offset: int) -> bytes:
        """Return ``data`` with each instance's first ``lane_count`` lanes XORed into its block.

        Bytes outside the blocks are returned unchanged.
        """
        self._blocks(data, lane_count, lane_offset)
        output = bytearray(data)
        size = lane_count * LANE_SIZE
        for i, state in enumerate(self.instances):
            start = i * lane_offset * LANE_SIZE
            output[start:start + size] = state.extract_and_add_bytes(
                bytes(output[start:start + size]), 0
            )
        return bytes(output)

    def fast_loop_absorb(
        self,
        lane_count: int,
        lane_offset_parallel: int,
        lane_offset_serial: int,
        data: bytes,
        nrounds: int = MAX_ROUNDS,
    ) -> int:
        """Absorb blocks into all instances, permuting after each, while data remains.

        Each step consumes ``lane_offset_serial`` lanes. Returns the number of
        bytes consumed.
        """
        _check_lane_layout(lane_count, lane_offset_parallel)
        if lane_offset_serial <= 0:
            raise ValueError("serial lane offset must be positive")
        data = bytes(data)
        needed = _layout_size(lane_count, lane_offset_parallel)
        step = lane_offset_serial * LANE_SIZE
        consumed = 0
        while len(data) - consumed >= needed:
            self.add_lanes_all(data[consumed:], lane_count, lane_offset_parallel)
            self.permute_all(nrounds)
            consumed += step
        return consumed