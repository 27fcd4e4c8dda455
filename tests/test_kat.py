import io

import pytest

from keccakkat.drbg import AesCtrDrbg
from keccakkat.kat import (
    KAT_SUCCESS,
    KatDataError,
    RequestRecord,
    find_marker,
    format_bstr,
    generate_requests,
    main,
    read_hex,
    read_request_file,
    write_request_file,
)


def test_format_bstr():
    assert format_bstr("seed = ", b"\x01\xab") == "seed = 01AB\n"


def test_format_bstr_empty():
    assert format_bstr("msg = ", b"") == "msg = 00\n"


def test_find_marker_positions_after_marker():
    stream = io.StringIO("junk count = 42\n")
    assert find_marker(stream, "count = ") is True
    assert stream.read() == "42\n"


def test_find_marker_missing():
    stream = io.StringIO("nothing here")
    assert find_marker(stream, "count = ") is False


def test_find_marker_stream_shorter_than_marker():
    assert find_marker(io.StringIO("cou"), "count = ") is False


def test_read_hex_exact():
    assert read_hex(io.StringIO("msg = 0A0B\n"), 2, "msg = ") == b"\x0a\x0b"


def test_read_hex_pads_short_value():
    assert read_hex(io.StringIO("msg = ABC\n"), 2, "msg = ") == b"\x0a\xbc"


def test_read_hex_keeps_last_bytes_of_long_value():
    assert read_hex(io.StringIO("msg = 112233\n"), 2, "msg = ") == b"\x22\x33"


def test_read_hex_lowercase():
    assert read_hex(io.StringIO("msg = ff\n"), 1, "msg = ") == b"\xff"


def test_read_hex_newline_before_digits_gives_zeros():
    assert read_hex(io.StringIO("msg = \n12"), 1, "msg = ") == b"\x00"


def test_read_hex_zero_length():
    assert read_hex(io.StringIO(""), 0, "msg = ") == b""


def test_read_hex_missing_marker():
    with pytest.raises(KatDataError):
        read_hex(io.StringIO("seed = 00\n"), 1, "msg = ")


def test_generate_requests_structure():
    records = generate_requests(count=4)
    assert [r.count for r in records] == [0, 1, 2, 3]
    assert [r.mlen for r in records] == [33, 66, 99, 132]
    assert all(len(r.seed) == 48 for r in records)


def test_generate_requests_first_seed_from_drbg():
    entropy = bytes(range(48))
    records = generate_requests(entropy, 1)
    assert records[0].seed == AesCtrDrbg(entropy).random_bytes(48)


def test_generate_requests_negative_count():
    with pytest.raises(ValueError):
        generate_requests(count=-1)


def test_write_request_file_format():
    out = io.StringIO()
    write_request_file(out, [RequestRecord(count=0, seed=b"\x01" * 48, msg=b"\xab")])
    lines = out.getvalue().split("\n")
    assert lines[0] == "count = 0"
    assert lines[1] == "seed = " + "01" * 48
    assert lines[2] == "mlen = 1"
    assert lines[3] == "msg = AB"
    assert lines[4:9] == ["pk =", "sk =", "smlen =", "sm =", ""]


def test_request_file_round_trip():
    records = generate_requests(count=5)
    out = io.StringIO()
    write_request_file(out, records)
    assert read_request_file(io.StringIO(out.getvalue())) == records


def test_read_request_file_empty():
    assert read_request_file(io.StringIO("")) == []


def test_read_request_file_missing_mlen():
    text = "count = 0\nseed = " + "00" * 48 + "\n"
    with pytest.raises(KatDataError):
        read_request_file(io.StringIO(text))


def test_read_request_file_missing_seed():
    with pytest.raises(KatDataError):
        read_request_file(io.StringIO("count = 0\n"))


def test_main_writes_request_file(tmp_path, capsys):
    result = main(["--name", "Test", "--count", "3", "--directory", str(tmp_path)])
    assert result == KAT_SUCCESS
    path = tmp_path / "PQCsignKAT_Test.req"
    with path.open() as stream:
        records = read_request_file(stream)
    assert records == generate_requests(count=3)


def test_main_reports_unwritable_directory(tmp_path, capsys):
    missing = tmp_path / "missing"
    result = main(["--name", "Test", "--count", "1", "--directory", str(missing)])
    assert result == -1
    assert "Couldn't open" in capsys.readouterr().out