"""Known-answer test request files: generation, writing and parsing."""

from __future__ import annotations

import argparse
import string
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from keccakkat.drbg import SEED_SIZE, AesCtrDrbg

MAX_MARKER_LEN = 50
DEFAULT_COUNT = 100
DEFAULT_ALGORITHM_NAME = "My Alg Name"

KAT_SUCCESS = 0
KAT_FILE_OPEN_ERROR = -1
KAT_DATA_ERROR = -3

_HEX_DIGITS = frozenset(string.hexdigits)


class KatDataError(ValueError):
    """A request file does not hold the expected data."""


@dataclass(frozen=True)
class RequestRecord:
    """One test vector of a request file."""

    count: int
    seed: bytes
    msg: bytes

    @property
    def mlen(self) -> int:
        return len(self.msg)


class _PushbackReader:
    """Character reader over a text stream that can give back one character."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: list[str] = []

    def read(self, size: int = 1) -> str:
        if self._pending:
            return self._pending.pop()
        return self._stream.read(1)

    def unread(self, ch: str) -> None:
        if ch:
            self._pending.append(ch)


def find_marker(stream, marker: str) -> bool:
    """Advance ``stream`` just past the next occurrence of ``marker``.

    Returns False if the end of the stream is reached first.
    """
    length = min(len(marker), MAX_MARKER_LEN - 1)
    target = marker[:length]
    window: deque[str] = deque(maxlen=length)
    for _ in range(length):
        ch = stream.read(1)
        if not ch:
            return False
        window.append(ch)
    while "".join(window) != target:
        ch = stream.read(1)
        if not ch:
            return False
        window.append(ch)
    return True


def read_hex(stream, length: int, marker: str) -> bytes:
    """Read a hexadecimal value of ``length`` bytes following ``marker``.

    Shorter values are padded with leading zeros; for longer ones the last
    ``length`` bytes are kept. Raises KatDataError if the marker is missing.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    if length == 0:
        return b""
    if not find_marker(stream, marker):
        raise KatDataError(f"marker {marker!r} not found")
    modulus = 1 << (8 * length)
    value = 0
    started = False
    while True:
        ch = stream.read(1)
        if not ch:
            break
        if ch not in _HEX_DIGITS:
            if started or ch == "\n":
                break
            continue
        started = True
        value = ((value << 4) | int(ch, 16)) % modulus
    return value.to_bytes(length, "big")


def format_bstr(label: str, data: bytes) -> str:
    """Return a line of ``label`` followed by ``data`` in upper-case hex."""
    hex_text = bytes(data).hex().upper() or "00"
    return f"{label}{hex_text}\n"


def generate_requests(entropy_input: bytes | None = None, count: int = DEFAULT_COUNT) -> list[RequestRecord]:
    """Derive ``count`` request records from a DRBG seeded with ``entropy_input``."""
    if count < 0:
        raise ValueError("count must not be negative")
    if entropy_input is None:
        entropy_input = bytes(range(SEED_SIZE))
    drbg = AesCtrDrbg(entropy_input)
    records = []
    for i in range(count):
        seed = drbg.random_bytes(SEED_SIZE)
        msg = drbg.random_bytes(33 * (i + 1))
        records.append(RequestRecord(count=i, seed=seed, msg=msg))
    return records


def write_request_file(stream: TextIO, records) -> None:
    """Write request records in the request-file format."""
    for record in records:
        stream.write(f"count = {record.count}\n")
        stream.write(format_bstr("seed = ", record.seed))
        stream.write(f"mlen = {record.mlen}\n")
        stream.write(format_bstr("msg = ", record.msg))
        stream.write("pk =\n")
        stream.write("sk =\n")
        stream.write("smlen =\n")
        stream.write("sm =\n\n")


def _scan_int(reader: _PushbackReader) -> int | None:
    ch = reader.read(1)
    while ch and ch.isspace():
        ch = reader.read(1)
    text = ""
    if ch in ("+", "-"):
        text, ch = ch, reader.read(1)
    while ch and ch in string.digits:
        text += ch
        ch = reader.read(1)
    reader.unread(ch)
    if not text.lstrip("+-"):
        return None
    return int(text)


def read_request_file(stream: TextIO) -> list[RequestRecord]:
    """Parse every record of a request file."""
    reader = _PushbackReader(stream)
    records = []
    while find_marker(reader, "count = "):
        count = _scan_int(reader)
        if count is None:
            raise KatDataError("unable to read 'count'")
        try:
            seed = read_hex(reader, SEED_SIZE, "seed = ")
        except KatDataError:
            raise KatDataError("unable to read 'seed'") from None
        if not find_marker(reader, "mlen = "):
            raise KatDataError("unable to read 'mlen'")
        mlen = _scan_int(reader)
        if mlen is None or mlen < 0:
            raise KatDataError("unable to read 'mlen'")
        try:
            msg = read_hex(reader, mlen, "msg = ")
        except KatDataError:
            raise KatDataError("unable to read 'msg'") from None
        records.append(RequestRecord(count=count, seed=seed, msg=msg))
    return records


def main(argv=None) -> int:
    """Write a request file and check that it reads back unchanged."""
    parser = argparse.ArgumentParser(description="Generate a signature known-answer request file.")
    parser.add_argument("--name", default=DEFAULT_ALGORITHM_NAME, help="algorithm name")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT, help="number of test vectors")
    parser.add_argument("--directory", default=".", help="output directory")
    args = parser.parse_args(argv)

    path = Path(args.directory) / f"PQCsignKAT_{args.name}.req"
    records = generate_requests(count=args.count)
    try:
        with path.open("w", encoding="ascii", newline="\n") as stream:
            write_request_file(stream, records)
    except OSError:
        print(f"Couldn't open <{path}> for write")
        return KAT_FILE_OPEN_ERROR

    try:
        with path.open("r", encoding="ascii") as stream:
            parsed = read_request_file(stream)
    except OSError:
        print(f"Couldn't open <{path}> for read")
        return KAT_FILE_OPEN_ERROR
    except KatDataError as error:
        print(f"ERROR: {error} from <{path}>")
        return KAT_DATA_ERROR

    if parsed != records:
        print(f"ERROR: data read back from <{path}> does not match")
        return KAT_DATA_ERROR
    return KAT_SUCCESS