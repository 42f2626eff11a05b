"""Chunked encryption/decryption of streams and files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from cenc_ctr.encryptor import AesCtrEncryptor, BytesLike

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 1024 * 64


def transform_stream(
    in_file: IO[bytes],
    out_file: IO[bytes],
    encryptor: AesCtrEncryptor,
    chunk_size: int = STREAM_CHUNK_SIZE,
) -> int:
    """Pipe ``in_file`` through ``encryptor`` into ``out_file``.

    Chunks need not be block aligned. Returns the number of bytes written.
    """

    if chunk_size <= 0:
        raise ValueError("Chunk size must be positive")

    total = 0
    while True:
        chunk = in_file.read(chunk_size)
        if not chunk:
            break
        out_file.write(encryptor.encrypt(chunk))
        total += len(chunk)
    return total


def transform_file(
    input_path: Path,
    output_path: Path,
    key: BytesLike,
    iv: BytesLike,
    *,
    overwrite: bool = False,
    chunk_size: int = STREAM_CHUNK_SIZE,
) -> int:
    """Encrypt or decrypt ``input_path`` into ``output_path`` as one sample."""

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    encryptor = AesCtrEncryptor()
    encryptor.initialize_with_iv(key, iv)
    with encryptor, input_path.open("rb") as in_file, output_path.open("wb") as out_file:
        written = transform_stream(in_file, out_file, encryptor, chunk_size)
    logger.debug("Transformed %d bytes from %s to %s", written, input_path, output_path)
    return written


__all__ = ["STREAM_CHUNK_SIZE", "transform_file", "transform_stream"]
