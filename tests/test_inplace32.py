import pytest

from keccakkat.inplace32 import KeccakP1600Interleaved
from keccakkat.interleave import to_bit_interleaving
from keccakkat.keccak import KeccakP1600


def _pattern(length, start=0):
    return bytes((start + 7 * i + 3) & 0xFF for i in range(length))


def test_new_state_is_zero():
    state = KeccakP1600Interleaved()
    assert state.to_bytes() == bytes(200)
    assert state.halves == [0] * 50


def test_permute_zero_state_first_lane():
    state = KeccakP1600Interleaved()
    state.permute_24rounds()
    first = int.from_bytes(state.extract_bytes(0, 8), "little")
    assert first == 0xF1258F7940E1DDE7


@pytest.mark.parametrize("nrounds", [0, 1, 4, 6, 12, 24])
def test_permute_matches_lane_implementation(nrounds):
    data = _pattern(200)
    interleaved = KeccakP1600Interleaved()
    reference = KeccakP1600()
    interleaved.add_bytes(data)
    reference.add_bytes(data)
    interleaved.permute(nrounds)
    reference.permute(nrounds)
    assert interleaved.to_bytes() == reference.to_bytes()


def test_permute_12_and_24_rounds_match_reference():
    data = _pattern(136, start=11)
    a = KeccakP1600Interleaved()
    b = KeccakP1600()
    a.add_bytes(data)
    b.add_bytes(data)
    a.permute_12rounds()
    b.permute_12rounds()
    assert a.to_bytes() == b.to_bytes()
    a.permute_24rounds()
    b.permute_24rounds()
    assert a.to_bytes() == b.to_bytes()


def test_halves_hold_interleaved_lanes():
    state = KeccakP1600Interleaved()
    state.add_bytes(bytes(range(1, 9)), 8)
    lane = int.from_bytes(bytes(range(1, 9)), "little")
    assert tuple(state.halves[2:4]) == to_bit_interleaving(lane)


@pytest.mark.parametrize("offset,length", [(0, 1), (3, 2), (5, 14), (7, 1), (13, 100), (190, 10)])
def test_add_bytes_unaligned_matches_reference(offset, length):
    a = KeccakP1600Interleaved()
    b = KeccakP1600()
    a.add_bytes(_pattern(200, start=5))
    b.add_bytes(_pattern(200, start=5))
    data = _pattern(length, start=99)
    a.add_bytes(data, offset)
    b.add_bytes(data, offset)
    assert a.to_bytes() == b.to_bytes()


def test_add_bytes_twice_cancels():
    state = KeccakP1600Interleaved()
    state.add_bytes(_pattern(50), 3)
    state.add_bytes(_pattern(50), 3)
    assert state.to_bytes() == bytes(200)


def test_add_byte_sets_single_byte():
    state = KeccakP1600Interleaved()
    state.add_byte(0xAB, 13)
    expected = bytearray(200)
    expected[13] = 0xAB
    assert state.to_bytes() == bytes(expected)


@pytest.mark.parametrize("offset,length", [(0, 8), (2, 3), (6, 20), (197, 3)])
def test_overwrite_bytes(offset, length):
    state = KeccakP1600Interleaved()
    base = _pattern(200, start=17)
    state.add_bytes(base)
    data = _pattern(length, start=200)
    state.overwrite_bytes(data, offset)
    expected = bytearray(base)
    expected[offset:offset + length] = data
    assert state.to_bytes() == bytes(expected)


@pytest.mark.parametrize("count", [0, 5, 8, 21, 200])
def test_overwrite_with_zeroes(count):
    state = KeccakP1600Interleaved()
    base = bytes([0xFF]) * 200
    state.overwrite_bytes(base)
    state.overwrite_with_zeroes(count)
    assert state.to_bytes() == bytes(count) + base[count:]


def test_extract_bytes_roundtrip():
    state = KeccakP1600Interleaved()
    data = _pattern(200, start=42)
    state.overwrite_bytes(data)
    assert state.extract_bytes(5, 37) == data[5:42]
    assert state.extract_bytes(0, 0) == b""


def test_extract_and_add_bytes_inverts():
    state = KeccakP1600Interleaved()
    state.add_bytes(_pattern(200, start=1))
    state.permute_24rounds()
    message = _pattern(61, start=77)
    masked = state.extract_and_add_bytes(message, 9)
    assert state.extract_and_add_bytes(masked, 9) == message


def test_initialize_clears_state():
    state = KeccakP1600Interleaved()
    state.add_bytes(_pattern(64))
    state.permute_24rounds()
    state.initialize()
    assert state.to_bytes() == bytes(200)


def test_out_of_range_errors():
    state = KeccakP1600Interleaved()
    with pytest.raises(ValueError):
        state.add_bytes(b"\x01\x02", 199)
    with pytest.raises(ValueError):
        state.extract_bytes(190, 11)
    with pytest.raises(ValueError):
        state.overwrite_with_zeroes(201)
    with pytest.raises(ValueError):
        state.add_byte(256, 0)
    with pytest.raises(ValueError):
        state.add_byte(1, 200)


def test_invalid_round_count():
    state = KeccakP1600Interleaved()
    with pytest.raises(ValueError):
        state.permute(25)