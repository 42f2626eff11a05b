"""AES-128-CTR encryptor following the Common Encryption (CENC) conventions.

A single :class:`AesCtrEncryptor` can process a sample in any number of
consecutive pieces (subsamples): every call continues the keystream exactly
where the previous one stopped, so splitting a buffer never changes the
result. Once a sample is done, :meth:`AesCtrEncryptor.update_iv` derives the
IV for the next sample.

Usage::

    encryptor = AesCtrEncryptor()
    encryptor.initialize_with_iv(key, iv)
    ciphertext = encryptor.encrypt(first_part) + encryptor.encrypt(second_part)
    encryptor.update_iv()
    next_iv = encryptor.iv

Instances are stateful and not thread-safe; serialize access externally if
one instance is shared.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Literal, Optional, Type, Union

from cenc_ctr.crypto.block import KEY_SIZE, AesBlockCipher, random_bytes
from cenc_ctr.crypto.counter import IV_SIZES, CounterBlock
from cenc_ctr.crypto.keystream import KeystreamCursor
from cenc_ctr.errors import EncryptorNotInitializedError, InvalidIvSizeError, InvalidKeySizeError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def _validate_key(key: BytesLike) -> None:
    if len(key) != KEY_SIZE:
        logger.debug("Rejected key of %d bytes", len(key))
        raise InvalidKeySizeError(f"Key must be {KEY_SIZE} bytes long, got {len(key)}")


def _validate_iv_size(size: int) -> None:
    if size not in IV_SIZES:
        logger.debug("Rejected IV size %d", size)
        raise InvalidIvSizeError(f"IV must be 8 or 16 bytes long, got {size}")


def _as_bytes(data: BytesLike | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, bytes):
        return data
    return memoryview(data).tobytes()


def _xor(data: bytes, keystream: bytes) -> bytes:
    if not data:
        return b""
    mixed = int.from_bytes(data, "big") ^ int.from_bytes(keystream, "big")
    return mixed.to_bytes(len(data), "big")


class AesCtrEncryptor:
    """Stateful AES-128-CTR transform with CENC IV advancement."""

    def __init__(self) -> None:
        self._cursor: KeystreamCursor | None = None

    def __enter__(self) -> AesCtrEncryptor:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> Literal[False]:
        self.close()
        return False

    # Initialization

    def initialize_with_iv(self, key: BytesLike, iv: BytesLike) -> None:
        """Set ``key`` and ``iv`` and restart the keystream.

        Raises :class:`InvalidKeySizeError` or :class:`InvalidIvSizeError`
        without touching the current state when either size is unsupported.
        """

        _validate_key(key)
        _validate_iv_size(len(iv))

        cipher = AesBlockCipher(bytes(key))
        counter = CounterBlock.from_iv(bytes(iv))
        self.close()
        self._cursor = KeystreamCursor(cipher, counter)
        logger.debug("Initialized AES-CTR encryptor with %d-byte IV", counter.iv_size)

    def initialize_with_random_iv(self, key: BytesLike, iv_size: int) -> None:
        """Like :meth:`initialize_with_iv` with ``iv_size`` random IV bytes."""

        _validate_key(key)
        _validate_iv_size(iv_size)

        iv = random_bytes(iv_size)
        logger.debug("Generated random IV: %s", iv.hex())
        self.initialize_with_iv(key, iv)

    def set_iv(self, iv: BytesLike) -> None:
        """Restart the keystream from ``iv``, keeping the current key."""

        cursor = self._require_cursor()
        _validate_iv_size(len(iv))
        cursor.reset(CounterBlock.from_iv(bytes(iv)))

    def update_iv(self) -> None:
        """Advance the IV to the one for the next sample.

        A 16-byte IV is advanced by the number of blocks consumed since the
        last reset, an 8-byte IV by exactly one. The block offset and the
        cached keystream block are kept.
        """

        cursor = self._require_cursor()
        next_counter = cursor.base.next_sample(cursor.blocks_generated)
        cursor.rebase(next_counter)

    def close(self) -> None:
        """Drop the cipher and cached keystream and return to the uninitialized state.

        The key schedule lives inside the ``cryptography`` cipher context and
        is released with it rather than overwritten.
        """

        if self._cursor is not None:
            self._cursor.wipe()
        self._cursor = None

    # Introspection

    @property
    def initialized(self) -> bool:
        return self._cursor is not None

    @property
    def iv(self) -> bytes:
        return self._require_cursor().base.iv

    @property
    def iv_size(self) -> int:
        return self._require_cursor().base.iv_size

    @property
    def block_offset(self) -> int:
        if self._cursor is None:
            return 0
        return self._cursor.block_offset

    # Transform

    def encrypt(self, data: BytesLike | str) -> bytes:
        """Encrypt ``data``, continuing from the current keystream position.

        ``str`` input is encoded as UTF-8 first.
        """

        return self._transform(_as_bytes(data))

    def decrypt(self, data: BytesLike | str) -> bytes:
        # CTR mode is its own inverse.
        return self._transform(_as_bytes(data))

    def decrypt_text(self, data: BytesLike, encoding: str = "utf-8") -> str:
        return self.decrypt(data).decode(encoding)

    def encrypt_into(self, source: BytesLike, destination: bytearray | memoryview, length: int | None = None) -> int:
        """Encrypt ``length`` bytes of ``source`` into ``destination``.

        ``destination`` may be the same buffer as ``source``. Returns the
        number of bytes written.
        """

        self._require_cursor()
        src = memoryview(source).cast("B")
        dst = memoryview(destination).cast("B")
        if dst.readonly:
            raise TypeError("Destination buffer must be writable")
        if length is None:
            length = len(src)
        if length < 0:
            raise ValueError("Length must be non-negative")
        if length > len(src) or length > len(dst):
            raise ValueError(f"Length {length} exceeds buffer size")

        dst[:length] = self._transform(src[:length].tobytes())
        return length

    def decrypt_into(self, source: BytesLike, destination: bytearray | memoryview, length: int | None = None) -> int:
        return self.encrypt_into(source, destination, length)

    def _transform(self, data: bytes) -> bytes:
        cursor = self._require_cursor()
        return _xor(data, cursor.take(len(data)))

    def _require_cursor(self) -> KeystreamCursor:
        if self._cursor is None:
            raise EncryptorNotInitializedError("Encryptor has not been initialized with a key and IV")
        return self._cursor


__all__ = ["AesCtrEncryptor", "BytesLike"]
