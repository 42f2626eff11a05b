"""CENC-compatible AES-128-CTR encryptor."""

from importlib.metadata import PackageNotFoundError, version

from cenc_ctr.encryptor import AesCtrEncryptor

__all__ = ["AesCtrEncryptor", "__version__"]

try:
    __version__ = version("cenc-ctr")
except PackageNotFoundError:  # pragma: no cover - happens only from source checkout
    __version__ = "0.0.0-dev"
