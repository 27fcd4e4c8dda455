"""AES-256 CTR DRBG used to derive deterministic known-answer test inputs."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

SEED_SIZE = 48
KEY_SIZE = 32
BLOCK_SIZE = 16

_V_MODULUS = 1 << (8 * BLOCK_SIZE)


def aes256_ecb(key: bytes, block: bytes) -> bytes:
    """Encrypt blocks of 16 bytes with AES-256 in ECB mode."""
    key = bytes(key)
    block = bytes(block)
    if len(key) != KEY_SIZE:
        raise ValueError(f"AES-256 key must be {KEY_SIZE} bytes, got {len(key)}")
    if not block or len(block) % BLOCK_SIZE:
        raise ValueError(f"input must be a non-empty multiple of {BLOCK_SIZE} bytes")
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return encryptor.update(block) + encryptor.finalize()


class AesCtrDrbg:
    """Deterministic random bit generator built on AES-256 in counter mode."""

    def __init__(self, entropy_input: bytes, personalization_string: bytes | None = None) -> None:
        seed_material = bytes(entropy_input)
        if len(seed_material) != SEED_SIZE:
            raise ValueError(f"entropy input must be {SEED_SIZE} bytes, got {len(seed_material)}")
        if personalization_string is not None:
            personalization = bytes(personalization_string)
            if len(personalization) != SEED_SIZE:
                raise ValueError(
                    f"personalization string must be {SEED_SIZE} bytes, got {len(personalization)}"
                )
            seed_material = bytes(a ^ b for a, b in zip(seed_material, personalization))
        self._key = bytes(KEY_SIZE)
        self._v = 0
        self._update(seed_material)
        self.reseed_counter = 1

    def _keystream(self, blocks: int) -> bytes:
        counters = []
        for _ in range(blocks):
            self._v = (self._v + 1) % _V_MODULUS
            counters.append(self._v.to_bytes(BLOCK_SIZE, "big"))
        return aes256_ecb(self._key, b"".join(counters))

    def _update(self, provided_data: bytes | None) -> None:
        temp = self._keystream(3)
        if provided_data is not None:
            temp = bytes(a ^ b for a, b in zip(temp, provided_data))
        self._key = temp[:KEY_SIZE]
        self._v = int.from_bytes(temp[KEY_SIZE:], "big")

    def random_bytes(self, length: int) -> bytes:
        """Return ``length`` pseudo-random bytes and advance the generator."""
        if length < 0:
            raise ValueError("length must not be negative")
        blocks = -(-length // BLOCK_SIZE)
        output = self._keystream(blocks)[:length] if blocks else b""
        self._update(None)
        self.reseed_counter += 1
        return output