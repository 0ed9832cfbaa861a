# envelope.py
# -*- coding: utf-8 -*-
"""
Binary envelope framing.

Layout (lengths fixed by the `CodecConfig`):

    [ salt ][ iterations_log2: 2 bytes, native-endian signed short ]
    [ iv ][ ciphertext: variable ][ tag ]

There is no length field for the ciphertext: it is whatever lies between the
header and the trailing tag, so offsets are taken from both ends. This module
is the only place that knows the layout.
"""

import struct
import logging
from typing import NamedTuple

from .config import CodecConfig
from ..utils.constants import ITERATIONS_FIELD_FORMAT, ITERATIONS_FIELD_BYTES
from ..utils.exceptions import ArgumentError, ParameterOutOfBoundsError

logger = logging.getLogger(__name__)


class Envelope(NamedTuple):
    salt: bytes
    iterations_log2: int
    iv: bytes
    ciphertext: bytes
    tag: bytes = b""

    @property
    def authenticated_data(self) -> bytes:
        """Every byte the tag covers: salt, iteration field, IV and ciphertext."""
        return self.salt + struct.pack(ITERATIONS_FIELD_FORMAT, self.iterations_log2) + self.iv + self.ciphertext

    def to_bytes(self) -> bytes:
        return self.authenticated_data + self.tag


def pack_envelope(config: CodecConfig, envelope: Envelope) -> bytes:
    """
    Serializes `envelope` after checking its fixed-length parts against `config`.

    Raises:
        ArgumentError: If salt, IV or tag has the wrong length, or the
            iteration value cannot be encoded in the 2-byte field.
    """
    if len(envelope.salt) != config.salt_length:
        raise ArgumentError(f"Salt must be {config.salt_length} bytes, got {len(envelope.salt)}.")
    if len(envelope.iv) != config.iv_length:
        raise ArgumentError(f"IV must be {config.iv_length} bytes, got {len(envelope.iv)}.")
    if len(envelope.tag) != config.mac_length:
        raise ArgumentError(f"Tag must be {config.mac_length} bytes, got {len(envelope.tag)}.")
    try:
        return envelope.to_bytes()
    except struct.error as e:
        raise ArgumentError(f"iterations_log2 {envelope.iterations_log2!r} cannot be encoded: {e}") from e


def unpack_envelope(config: CodecConfig, data) -> Envelope:
    """
    Splits raw envelope bytes into their parts.

    Raises:
        ParameterOutOfBoundsError: If `data` is shorter than the minimal
            envelope or the iteration field holds a negative value.
    """
    data = bytes(data)
    if len(data) < config.minimum_envelope_length:
        msg = f"Envelope too short: {len(data)} bytes, need at least {config.minimum_envelope_length}."
        logger.error(msg)
        raise ParameterOutOfBoundsError(msg)

    iterations_offset = config.salt_length
    iv_offset = iterations_offset + ITERATIONS_FIELD_BYTES
    ciphertext_offset = iv_offset + config.iv_length
    tag_offset = len(data) - config.mac_length

    (iterations_log2,) = struct.unpack(ITERATIONS_FIELD_FORMAT, data[iterations_offset:iv_offset])
    if iterations_log2 < 0:
        msg = f"PBKDF2 iterations out of bounds (log2 = {iterations_log2})."
        logger.error(msg)
        raise ParameterOutOfBoundsError(msg)

    return Envelope(
        salt=data[:iterations_offset],
        iterations_log2=iterations_log2,
        iv=data[iv_offset:ciphertext_offset],
        ciphertext=data[ciphertext_offset:tag_offset],
        tag=data[tag_offset:],
    )
