"""Tests for counter block arithmetic."""
from __future__ import annotations

import pytest

from cenc_ctr.crypto.counter import CounterBlock

MAX_64 = (1 << 64) - 1
MAX_128 = (1 << 128) - 1


def test_from_iv_keeps_declared_size() -> None:
    counter = CounterBlock.from_iv(bytes(7) + b"\x2a")
    assert counter.iv_size == 8
    assert counter.iv == bytes(7) + b"\x2a"
    assert counter.to_bytes() == bytes(15) + b"\x2a"


def test_high_and_low_words() -> None:
    counter = CounterBlock.from_iv(bytes(7) + b"\x01" + bytes(7) + b"\x03")
    assert counter.high == 1
    assert counter.low == 3


def test_add_blocks_carries_into_high_word() -> None:
    counter = CounterBlock(16, MAX_64).add_blocks(4)
    assert (counter.high, counter.low) == (1, 3)


def test_add_blocks_wraps_at_128_bits() -> None:
    assert CounterBlock(16, MAX_128 - 1).add_blocks(4).value == 2


def test_block_at_wraps_at_128_bits() -> None:
    assert CounterBlock(16, MAX_128).block_at(1) == bytes(16)


def test_next_sample_for_64_bit_iv_increments_by_one() -> None:
    assert CounterBlock(8, 0).next_sample(400).value == 1
    assert CounterBlock(8, MAX_64 - 1).next_sample(1).value == MAX_64
    assert CounterBlock(8, MAX_64).next_sample(1).value == 0


def test_next_sample_for_128_bit_iv_adds_block_count() -> None:
    assert CounterBlock(16, 0).next_sample(4).value == 4


def test_rejects_unsupported_sizes() -> None:
    with pytest.raises(ValueError):
        CounterBlock.from_iv(bytes(15))
    with pytest.raises(ValueError):
        CounterBlock(8, 1 << 64)
    with pytest.raises(ValueError):
        CounterBlock(16, 0).add_blocks(-1)
