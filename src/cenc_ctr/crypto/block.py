"""Block cipher and randomness collaborators."""

from __future__ import annotations

import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

KEY_SIZE = 16
BLOCK_SIZE = 16


class AesBlockCipher:
    """Raw AES-128 encryption of whole 16-byte blocks.

    ECB is used only as a vehicle for single-block encryption of counter
    values; the caller is responsible for never feeding it plaintext.
    """

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise ValueError(f"AES-128 key must be {KEY_SIZE} bytes long, got {len(key)}")
        self._encryptor = Cipher(algorithms.AES(bytes(key)), modes.ECB()).encryptor()

    def encrypt_block(self, block: bytes) -> bytes:
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"Block must be {BLOCK_SIZE} bytes long, got {len(block)}")
        return self._encryptor.update(block)

    def encrypt_blocks(self, data: bytes) -> bytes:
        """Encrypt a run of concatenated blocks in one call."""

        if len(data) % BLOCK_SIZE:
            raise ValueError("Data length must be a multiple of the block size")
        if not data:
            return b""
        return self._encryptor.update(data)


def random_bytes(size: int) -> bytes:
    """Return ``size`` bytes from the operating system CSPRNG."""

    return os.urandom(size)


__all__ = ["AesBlockCipher", "BLOCK_SIZE", "KEY_SIZE", "random_bytes"]
