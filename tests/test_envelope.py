# tests/test_envelope.py
# -*- coding: utf-8 -*-
"""Tests for the binary envelope layout."""

import struct

import pytest

from pwseal.core.config import build_config
from pwseal.core.envelope import Envelope, pack_envelope, unpack_envelope
from pwseal.utils.exceptions import ArgumentError, ParameterOutOfBoundsError


CONFIG = build_config()
SALT = b"S" * CONFIG.salt_length
IV = b"I" * CONFIG.iv_length
TAG = b"T" * CONFIG.mac_length


def test_layout_is_salt_iterations_iv_ciphertext_tag():
    data = pack_envelope(CONFIG, Envelope(SALT, 12, IV, b"ciphertext", TAG))
    assert data[:16] == SALT
    assert data[16:18] == struct.pack("=h", 12)
    assert data[18:34] == IV
    assert data[34:-32] == b"ciphertext"
    assert data[-32:] == TAG


def test_unpack_inverts_pack():
    original = Envelope(SALT, 17, IV, b"\x00\x01\x02" * 50, TAG)
    parsed = unpack_envelope(CONFIG, pack_envelope(CONFIG, original))
    assert parsed == original


def test_empty_ciphertext_gives_minimal_envelope():
    data = pack_envelope(CONFIG, Envelope(SALT, 12, IV, b"", TAG))
    assert len(data) == CONFIG.minimum_envelope_length
    parsed = unpack_envelope(CONFIG, data)
    assert parsed.ciphertext == b""
    assert parsed.tag == TAG


def test_authenticated_data_excludes_only_the_tag():
    envelope = Envelope(SALT, 12, IV, b"abc", TAG)
    assert envelope.authenticated_data + TAG == envelope.to_bytes()


def test_unpack_accepts_bytearray_and_memoryview():
    data = pack_envelope(CONFIG, Envelope(SALT, 12, IV, b"xyz", TAG))
    assert unpack_envelope(CONFIG, bytearray(data)) == unpack_envelope(CONFIG, memoryview(data))


@pytest.mark.parametrize("length", [0, 1, 18, 34, 65])
def test_unpack_rejects_truncated_input(length: int):
    with pytest.raises(ParameterOutOfBoundsError):
        unpack_envelope(CONFIG, b"\x00" * length)


def test_unpack_rejects_negative_iterations():
    data = SALT + struct.pack("=h", -1) + IV + TAG
    with pytest.raises(ParameterOutOfBoundsError):
        unpack_envelope(CONFIG, data)


@pytest.mark.parametrize(
    "envelope",
    [
        Envelope(SALT[:-1], 12, IV, b"", TAG),
        Envelope(SALT, 12, IV + b"x", b"", TAG),
        Envelope(SALT, 12, IV, b"", TAG[:-1]),
    ],
)
def test_pack_rejects_wrong_part_lengths(envelope):
    with pytest.raises(ArgumentError):
        pack_envelope(CONFIG, envelope)


def test_pack_rejects_unencodable_iterations():
    with pytest.raises(ArgumentError):
        pack_envelope(CONFIG, Envelope(SALT, 0x8000, IV, b"", TAG))
