# tests/test_config.py
# -*- coding: utf-8 -*-
"""Tests for construction-time configuration and its validation."""

import dataclasses
import logging
from types import SimpleNamespace

import pytest

from pwseal import SymmetricEncryption
from pwseal.core import compression
from pwseal.core import config as config_module
from pwseal.core.config import build_config
from pwseal.utils.constants import PBKDF2_ITERATIONS_LOG2_MINIMUM
from pwseal.utils.exceptions import ConfigurationError


def test_defaults_resolve_aes_and_sha256_lengths():
    config = build_config()
    assert config.iterations_log2 == PBKDF2_ITERATIONS_LOG2_MINIMUM == 12
    assert config.use_compression is False
    assert config.reject_downgrade is False
    assert config.salt_length == 16
    assert config.iv_length == 16
    assert config.cipher_key_length == 32
    assert config.mac_key_length == 32
    assert config.mac_length == 32
    assert config.header_length == 16 + 2 + 16
    assert config.minimum_envelope_length == 16 + 2 + 16 + 32


def test_higher_iterations_are_kept():
    assert build_config(20).iterations_log2 == 20


def test_iterations_below_floor_fall_back_with_warning(caplog):
    caplog.set_level(logging.WARNING)
    config = build_config(PBKDF2_ITERATIONS_LOG2_MINIMUM - 4)
    assert config.iterations_log2 == PBKDF2_ITERATIONS_LOG2_MINIMUM
    assert "too low" in caplog.text


@pytest.mark.parametrize("bad", [True, 12.0, "12", None])
def test_iterations_must_be_int(bad):
    with pytest.raises(ConfigurationError):
        build_config(bad)


def test_iterations_must_fit_envelope_field():
    with pytest.raises(ConfigurationError):
        build_config(0x8000)


def test_compression_flag_is_honoured():
    assert build_config(use_compression=True).use_compression is True


def test_compression_disabled_when_zlib_missing(monkeypatch, caplog):
    caplog.set_level(logging.WARNING)
    monkeypatch.setattr(compression, "zlib", None)
    config = build_config(use_compression=True)
    assert config.use_compression is False
    assert "Compression not available" in caplog.text


def test_config_is_immutable():
    crypto = SymmetricEncryption()
    with pytest.raises(dataclasses.FrozenInstanceError):
        crypto.config.iterations_log2 = 4
    with pytest.raises(AttributeError):
        crypto.config = build_config(20)


def test_unresolvable_iv_size_is_fatal(monkeypatch):
    monkeypatch.setattr(config_module, "AES", SimpleNamespace(block_size=0, key_size=(16, 24, 32)))
    with pytest.raises(ConfigurationError):
        SymmetricEncryption()


def test_unresolvable_key_size_is_fatal(monkeypatch):
    monkeypatch.setattr(config_module, "AES", SimpleNamespace(block_size=16))
    with pytest.raises(ConfigurationError):
        build_config()


def test_unknown_mac_hash_is_fatal(monkeypatch):
    monkeypatch.setattr(config_module, "HMAC_HASH_NAME", "no-such-hash")
    with pytest.raises(ConfigurationError):
        build_config()
