# keccakkat

Pure-Python building blocks for the Keccak-p[1600] permutation and for
known-answer-test (KAT) request files of signature schemes.

## Modules

- `keccakkat.keccak`: `KeccakP1600`, a state of 25 little-endian 64-bit
  lanes. It has byte-level `add_byte`, `add_bytes`, `overwrite_bytes`,
  `overwrite_with_zeroes`, `extract_bytes` and `extract_and_add_bytes`;
  `permute(nrounds)`, which applies the last `nrounds` rounds of
  Keccak-f[1600]; `permute_12rounds` and `permute_24rounds`;
  `fast_loop_absorb(lane_count, data, nrounds)`, which absorbs whole blocks
  and returns the number of bytes consumed; and `to_bytes`. The function
  `permute_lanes(lanes, nrounds)` permutes a list of 25 lanes directly.
- `keccakkat.interleave`: `rol32`, `to_bit_interleaving`,
  `from_bit_interleaving` and `permute_interleaved`, the permutation on 50
  32-bit words (the even and then the odd word of each lane).
- `keccakkat.inplace32`: `KeccakP1600Interleaved`, a state kept in
  bit-interleaved form. Its byte interface matches `KeccakP1600` and shows
  the usual little-endian layout.
- `keccakkat.times4`: `KeccakP1600Times4`, four independent states permuted
  together. Per-instance operations take an instance index 0 to 3. The
  `add_lanes_all`, `overwrite_lanes_all`, `extract_lanes_all` and
  `extract_and_add_lanes_all` methods use a buffer in which instance `i`
  starts `i * lane_offset` lanes in. There are 4-, 6-, 12- and 24-round
  permutations, `permute_all(nrounds)`, and `fast_loop_absorb`.
- `keccakkat.drbg`: `AesCtrDrbg`, an AES-256 CTR deterministic random bit
  generator seeded with 48 bytes of entropy and an optional 48-byte
  personalization string, and `aes256_ecb`.
- `keccakkat.kat`: `RequestRecord` (count, seed, msg, and `mlen`),
  `find_marker`, `read_hex`, `format_bstr`, `generate_requests`,
  `write_request_file`, `read_request_file` and the `main` command. Badly
  formed request files raise `KatDataError`.

Arguments out of range raise `ValueError`. Examples are byte ranges beyond
the 200-byte state, round counts above 24 and wrong seed lengths.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

### The permutation

```python
from keccakkat.keccak import KeccakP1600

state = KeccakP1600()
state.add_bytes(b"abc", 0)
state.permute_24rounds()
print(state.extract_bytes(0, 32).hex())
```

The bit-interleaved state gives the same bytes:

```python
from keccakkat.inplace32 import KeccakP1600Interleaved

other = KeccakP1600Interleaved()
other.add_bytes(b"abc", 0)
other.permute_24rounds()
assert other.to_bytes() == state.to_bytes()
```

### Four states at once

```python
from keccakkat.times4 import KeccakP1600Times4

states = KeccakP1600Times4()
for instance in range(4):
    states.add_bytes(instance, bytes([instance]) * 8, 0)
states.permute_all_24rounds()
print(states.extract_bytes(2, 0, 16).hex())
```

### Deterministic random bytes

```python
from keccakkat.drbg import AesCtrDrbg

drbg = AesCtrDrbg(bytes(range(48)), None)
seed = drbg.random_bytes(48)
```

### KAT request files

```python
from keccakkat.kat import generate_requests, read_request_file, write_request_file

records = generate_requests(bytes(range(48)), 100)
with open("requests.req", "w") as stream:
    write_request_file(stream, records)
with open("requests.req") as stream:
    assert read_request_file(stream) == records
```

Record `i` has a 48-byte seed and a message of `33 * (i + 1)` bytes. Both
are drawn from the generator in that order.

### Command

```
keccakkat-genkat [--name NAME] [--count N] [--directory DIR]
```

This writes `PQCsignKAT_<NAME>.req` (default name `My Alg Name`, 100 records,
current directory). The records come from the fixed entropy input
0, 1, …, 47. The command then reads the file back and checks that it matches.
The exit status is 0 on success, -1 if the file cannot be opened and -3 if
the data read back is wrong.

## What this package does not do

It contains no signature scheme. It does not generate key pairs, sign or
verify messages, or write response (`.rsp`) files. The `pk`, `sk`, `smlen`
and `sm` fields of a request file are left empty. It also has no SHA-3 or
SHAKE hashing functions built on the permutation.