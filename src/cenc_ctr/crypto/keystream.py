"""Keystream generation with mid-block resumption."""

from __future__ import annotations

from cenc_ctr.crypto.block import BLOCK_SIZE, AesBlockCipher
from cenc_ctr.crypto.counter import CounterBlock


class KeystreamCursor:
    """Keystream position relative to a base counter.

    Keystream byte ``p`` is byte ``p % 16`` of ``AES(base + p // 16)``. The
    most recent block is cached so that a request ending inside a block can
    be resumed by the next request without regenerating or skipping bytes.
    Blocks are generated lazily, so ``blocks_generated`` always equals the
    number of blocks the consumed bytes have touched.
    """

    def __init__(self, cipher: AesBlockCipher, base: CounterBlock) -> None:
        self._cipher = cipher
        self.reset(base)

    @property
    def base(self) -> CounterBlock:
        return self._base

    @property
    def block_offset(self) -> int:
        return self._offset

    @property
    def blocks_generated(self) -> int:
        return self._blocks_generated

    def reset(self, base: CounterBlock) -> None:
        self._base = base
        self._blocks_generated = 0
        self._offset = 0
        self._cached = b""

    def rebase(self, base: CounterBlock) -> None:
        """Continue from ``base`` without dropping the partially used block."""

        self._base = base
        self._blocks_generated = 0

    def take(self, length: int) -> bytes:
        """Consume and return the next ``length`` keystream bytes."""

        if length < 0:
            raise ValueError("Length must be non-negative")

        stream = bytearray()
        if self._offset and length:
            used = min(length, BLOCK_SIZE - self._offset)
            stream += self._cached[self._offset : self._offset + used]
            self._offset = (self._offset + used) % BLOCK_SIZE
            length -= used

        if length:
            block_count = -(-length // BLOCK_SIZE)
            counters = b"".join(
                self._base.block_at(self._blocks_generated + index) for index in range(block_count)
            )
            blocks = self._cipher.encrypt_blocks(counters)
            self._blocks_generated += block_count
            self._cached = blocks[-BLOCK_SIZE:]
            self._offset = length % BLOCK_SIZE
            stream += blocks[:length]

        return bytes(stream)

    def wipe(self) -> None:
        self._cached = b""
        self._offset = 0
        self._blocks_generated = 0


__all__ = ["KeystreamCursor"]
