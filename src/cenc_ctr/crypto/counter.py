"""Counter block arithmetic for CENC AES-CTR.

The working value is always a 128-bit big-endian integer. An 8-byte IV sits
in the low 64 bits with the high 64 bits held at zero. The declared IV size
is kept next to the value because the per-sample advance rule depends on it:

* 16-byte IV: add the number of blocks consumed by the previous sample,
  wrapping modulo 2**128.
* 8-byte IV: add one to the low 64 bits, wrapping modulo 2**64.
"""

from __future__ import annotations

from dataclasses import dataclass

from cenc_ctr.crypto.block import BLOCK_SIZE

IV_SIZES = (8, 16)

_MASK_64 = (1 << 64) - 1
_MASK_128 = (1 << 128) - 1


@dataclass(frozen=True)
class CounterBlock:
    iv_size: int
    value: int

    def __post_init__(self) -> None:
        if self.iv_size not in IV_SIZES:
            raise ValueError(f"IV size must be 8 or 16 bytes, got {self.iv_size}")
        limit = _MASK_64 if self.iv_size == 8 else _MASK_128
        if not 0 <= self.value <= limit:
            raise ValueError("Counter value does not fit the declared IV size")

    @classmethod
    def from_iv(cls, iv: bytes) -> CounterBlock:
        return cls(iv_size=len(iv), value=int.from_bytes(iv, "big"))

    @property
    def high(self) -> int:
        return self.value >> 64

    @property
    def low(self) -> int:
        return self.value & _MASK_64

    @property
    def iv(self) -> bytes:
        """The IV at its declared length, never padded."""

        return self.value.to_bytes(self.iv_size, "big")

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(BLOCK_SIZE, "big")

    def block_at(self, index: int) -> bytes:
        """Counter block ``index`` positions after this one."""

        return ((self.value + index) & _MASK_128).to_bytes(BLOCK_SIZE, "big")

    def add_blocks(self, count: int) -> CounterBlock:
        """Return the counter advanced by ``count`` blocks (mod 2**128).

        For 8-byte IVs the result is truncated back to 64 bits so that the
        value keeps fitting its declared size.
        """

        if count < 0:
            raise ValueError("Block count must be non-negative")
        advanced = (self.value + count) & _MASK_128
        if self.iv_size == 8:
            advanced &= _MASK_64
        return CounterBlock(self.iv_size, advanced)

    def next_sample(self, blocks_consumed: int) -> CounterBlock:
        """IV for the sample that follows one spanning ``blocks_consumed`` blocks."""

        if self.iv_size == 8:
            return CounterBlock(8, (self.low + 1) & _MASK_64)
        return self.add_blocks(blocks_consumed)


__all__ = ["CounterBlock", "IV_SIZES"]
