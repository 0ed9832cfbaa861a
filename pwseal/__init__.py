# __init__.py
# -*- coding: utf-8 -*-
"""
pwseal: encrypt a byte string with a password.

    from pwseal import SymmetricEncryption

    crypto = SymmetricEncryption()
    blob = crypto.encrypt(b"secret", "password")
    assert crypto.decrypt(blob, "password") == b"secret"

The output is a single self-describing envelope (salt, PBKDF2 cost, IV,
AES-CFB8 ciphertext, HMAC-SHA256 tag) that needs nothing but the password
to decrypt.
"""

from .core.codec import SymmetricEncryption
from .core.config import CodecConfig, build_config
from .core.crypto_logic import derive_key, expand_key
from .core.envelope import Envelope, pack_envelope, unpack_envelope
from .utils.exceptions import (
    PwsealError,
    ArgumentError,
    ConfigurationError,
    RandomnessUnavailableError,
    ParameterOutOfBoundsError,
    AuthenticationError,
    DecryptionError,
    DecompressionError,
)

__version__ = "0.1.0"

__all__ = [
    "SymmetricEncryption",
    "CodecConfig",
    "build_config",
    "derive_key",
    "expand_key",
    "Envelope",
    "pack_envelope",
    "unpack_envelope",
    "PwsealError",
    "ArgumentError",
    "ConfigurationError",
    "RandomnessUnavailableError",
    "ParameterOutOfBoundsError",
    "AuthenticationError",
    "DecryptionError",
    "DecompressionError",
]
