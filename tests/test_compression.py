# tests/test_compression.py
# -*- coding: utf-8 -*-
"""Tests for the optional zlib compression layer."""

import zlib

import pytest

from pwseal.core import compression
from pwseal.utils.exceptions import ConfigurationError, DecompressionError


def test_compress_uses_zlib_format():
    data = b"abc" * 1000
    compressed = compression.compress(data)
    assert len(compressed) < len(data)
    assert zlib.decompress(compressed) == data
    assert compression.decompress(compressed) == data


def test_decompress_garbage_raises():
    with pytest.raises(DecompressionError):
        compression.decompress(b"definitely not zlib")


def test_missing_zlib_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(compression, "zlib", None)
    assert compression.is_available() is False
    with pytest.raises(ConfigurationError):
        compression.compress(b"data")
