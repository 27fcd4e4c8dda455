"""Keccak-p[1600] permutations, a four-way state, an AES-256 CTR DRBG and KAT request files."""

__version__ = "0.1.0"

__all__ = ["drbg", "inplace32", "interleave", "kat", "keccak", "times4"]