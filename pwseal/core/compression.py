# compression.py
# -*- coding: utf-8 -*-
"""Optional zlib compression of the plaintext, applied before encryption."""

import logging

try:
    import zlib
except ImportError:  # interpreter built without zlib
    zlib = None

from ..utils.constants import COMPRESSION_LEVEL
from ..utils.exceptions import ConfigurationError, DecompressionError

logger = logging.getLogger(__name__)


def is_available() -> bool:
    return zlib is not None


def compress(data: bytes) -> bytes:
    if zlib is None:
        raise ConfigurationError("Compression requested but zlib is not available.")
    compressed = zlib.compress(data, COMPRESSION_LEVEL)
    logger.debug(f"Compressed payload {len(data)} -> {len(compressed)} bytes.")
    return compressed


def decompress(data: bytes) -> bytes:
    """
    Inverse of `compress`.

    Raises:
        DecompressionError: If the payload is not a valid zlib stream.
    """
    if zlib is None:
        raise ConfigurationError("Decompression requested but zlib is not available.")
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        msg = f"Failed decompressing the decrypted payload: {e}"
        logger.error(msg)
        raise DecompressionError(msg) from e
