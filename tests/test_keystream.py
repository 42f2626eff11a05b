"""Tests for the keystream cursor."""
from __future__ import annotations

import pytest

from cenc_ctr.crypto.block import AesBlockCipher
from cenc_ctr.crypto.counter import CounterBlock
from cenc_ctr.crypto.keystream import KeystreamCursor
from tests.conftest import NIST_IV, NIST_KEY


def _expected_keystream(length: int) -> bytes:
    cipher = AesBlockCipher(NIST_KEY)
    base = CounterBlock.from_iv(NIST_IV)
    blocks = b"".join(cipher.encrypt_block(base.block_at(index)) for index in range(-(-length // 16)))
    return blocks[:length]


def test_take_matches_block_by_block_keystream() -> None:
    cursor = KeystreamCursor(AesBlockCipher(NIST_KEY), CounterBlock.from_iv(NIST_IV))
    assert cursor.take(50) == _expected_keystream(50)
    assert cursor.blocks_generated == 4
    assert cursor.block_offset == 2


def test_take_resumes_inside_cached_block() -> None:
    cursor = KeystreamCursor(AesBlockCipher(NIST_KEY), CounterBlock.from_iv(NIST_IV))
    pieces = [cursor.take(size) for size in (5, 5, 6, 1, 31)]
    assert b"".join(pieces) == _expected_keystream(48)
    assert cursor.blocks_generated == 3
    assert cursor.block_offset == 0


def test_blocks_generated_only_when_needed() -> None:
    cursor = KeystreamCursor(AesBlockCipher(NIST_KEY), CounterBlock.from_iv(NIST_IV))
    cursor.take(16)
    assert cursor.blocks_generated == 1
    cursor.take(0)
    assert cursor.blocks_generated == 1
    cursor.take(1)
    assert cursor.blocks_generated == 2


def test_reset_restarts_stream() -> None:
    cursor = KeystreamCursor(AesBlockCipher(NIST_KEY), CounterBlock.from_iv(NIST_IV))
    first = cursor.take(21)
    cursor.reset(CounterBlock.from_iv(NIST_IV))
    assert cursor.block_offset == 0
    assert cursor.take(21) == first


def test_negative_length_rejected() -> None:
    cursor = KeystreamCursor(AesBlockCipher(NIST_KEY), CounterBlock.from_iv(NIST_IV))
    with pytest.raises(ValueError):
        cursor.take(-1)


def test_block_cipher_rejects_bad_sizes() -> None:
    with pytest.raises(ValueError):
        AesBlockCipher(NIST_KEY[:13])
    cipher = AesBlockCipher(NIST_KEY)
    with pytest.raises(ValueError):
        cipher.encrypt_block(bytes(15))
    with pytest.raises(ValueError):
        cipher.encrypt_blocks(bytes(17))
    assert cipher.encrypt_blocks(b"") == b""
