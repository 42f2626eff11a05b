"""Per-sample CENC helpers built on :class:`AesCtrEncryptor`.

A protected sample may interleave clear ranges (left as-is, e.g. NAL
headers) with protected ranges. All protected ranges of one sample share a
single continuous keystream; each new sample starts at a fresh IV derived
from the previous sample's IV.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

from cenc_ctr.encryptor import AesCtrEncryptor, BytesLike
from cenc_ctr.errors import SubsampleLayoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubsampleEntry:
    clear_bytes: int
    protected_bytes: int

    def __post_init__(self) -> None:
        if self.clear_bytes < 0 or self.protected_bytes < 0:
            raise SubsampleLayoutError("Subsample sizes must be non-negative")


@dataclass(frozen=True)
class ProtectedSample:
    iv: bytes
    data: bytes


SampleInput = Union[BytesLike, Tuple[BytesLike, Sequence[SubsampleEntry]]]


def transform_sample(
    encryptor: AesCtrEncryptor,
    data: BytesLike,
    subsamples: Sequence[SubsampleEntry] | None = None,
) -> bytes:
    """Encrypt or decrypt one sample, honouring its clear/protected layout.

    Without ``subsamples`` the whole sample is protected.
    """

    payload = bytes(data)
    if not subsamples:
        return encryptor.encrypt(payload)

    total = sum(entry.clear_bytes + entry.protected_bytes for entry in subsamples)
    if total != len(payload):
        raise SubsampleLayoutError(f"Subsamples cover {total} bytes but the sample has {len(payload)}")

    out = bytearray(payload)
    position = 0
    for entry in subsamples:
        position += entry.clear_bytes
        end = position + entry.protected_bytes
        encryptor.encrypt_into(memoryview(payload)[position:end], memoryview(out)[position:end])
        position = end
    return bytes(out)


def _process_samples(key: BytesLike, iv: BytesLike, samples: Iterable[SampleInput]) -> list[ProtectedSample]:
    encryptor = AesCtrEncryptor()
    encryptor.initialize_with_iv(key, iv)
    results: list[ProtectedSample] = []
    with encryptor:
        for index, sample in enumerate(samples):
            if isinstance(sample, tuple):
                data, subsamples = sample
            else:
                data, subsamples = sample, None

            sample_iv = encryptor.iv
            encryptor.set_iv(sample_iv)
            results.append(ProtectedSample(iv=sample_iv, data=transform_sample(encryptor, data, subsamples)))
            encryptor.update_iv()
            logger.debug("Sample %d processed, next IV %s", index, encryptor.iv.hex())
    return results


def encrypt_samples(key: BytesLike, iv: BytesLike, samples: Iterable[SampleInput]) -> list[ProtectedSample]:
    """Encrypt consecutive samples starting at ``iv``.

    Each result carries the IV its sample was encrypted with.
    """

    return _process_samples(key, iv, samples)


def decrypt_samples(key: BytesLike, iv: BytesLike, samples: Iterable[SampleInput]) -> list[ProtectedSample]:
    return _process_samples(key, iv, samples)


__all__ = [
    "ProtectedSample",
    "SampleInput",
    "SubsampleEntry",
    "decrypt_samples",
    "encrypt_samples",
    "transform_sample",
]
