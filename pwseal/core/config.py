# config.py
# -*- coding: utf-8 -*-
"""
Immutable per-instance configuration.

A `CodecConfig` is built once by `build_config`, which validates the caller's
choices and resolves every algorithm length from the primitives themselves.
All envelope offsets are derived from it, so encrypt and decrypt can never
disagree about the layout.
"""

import logging
from dataclasses import dataclass

from Crypto.Cipher import AES

from . import compression
from .crypto_logic import keyed_hash
from ..utils.constants import (
    PBKDF2_ITERATIONS_LOG2_MINIMUM,
    PBKDF2_SALT_BYTES,
    ITERATIONS_FIELD_BYTES,
    ITERATIONS_LOG2_FIELD_MAXIMUM,
    HMAC_HASH_NAME,
    HMAC_KEY_BYTES,
)
from ..utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodecConfig:
    iterations_log2: int
    use_compression: bool
    reject_downgrade: bool
    salt_length: int
    iv_length: int
    cipher_key_length: int
    mac_key_length: int
    mac_length: int

    @property
    def header_length(self) -> int:
        """Bytes before the ciphertext: salt, iteration field and IV."""
        return self.salt_length + ITERATIONS_FIELD_BYTES + self.iv_length

    @property
    def minimum_envelope_length(self) -> int:
        """Length of the envelope for an empty ciphertext."""
        return self.header_length + self.mac_length


def resolve_cipher_parameters() -> tuple[int, int]:
    """
    Returns (iv_length, cipher_key_length) for AES in CFB mode.

    Raises:
        ConfigurationError: If the cipher module does not report usable sizes.
    """
    try:
        iv_length = int(AES.block_size)
        cipher_key_length = max(AES.key_size)
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Could not determine cipher parameters: {e}") from e

    if iv_length <= 0:
        raise ConfigurationError("Could not determine IV size.")
    if cipher_key_length <= 0:
        raise ConfigurationError("Could not determine required cipher key size.")
    return iv_length, cipher_key_length


def resolve_mac_length() -> int:
    """Output length of the authentication HMAC, measured on an empty message."""
    try:
        mac_length = len(keyed_hash(b"", b"", HMAC_HASH_NAME))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Could not determine authentication algorithm output size: {e}") from e
    if mac_length <= 0:
        raise ConfigurationError("Could not determine authentication algorithm output size.")
    return mac_length


def build_config(
    iterations_log2: int = PBKDF2_ITERATIONS_LOG2_MINIMUM,
    use_compression: bool = False,
    reject_downgrade: bool = False,
) -> CodecConfig:
    """
    Validates the caller's settings and returns a frozen `CodecConfig`.

    An iteration log2 below the safety floor is replaced by the floor with a
    warning, as is a compression request when zlib is missing. Anything that
    cannot be represented in the envelope is a `ConfigurationError`.
    """
    if isinstance(iterations_log2, bool) or not isinstance(iterations_log2, int):
        raise ConfigurationError(f"iterations_log2 must be an int, got {type(iterations_log2).__name__}.")
    if iterations_log2 > ITERATIONS_LOG2_FIELD_MAXIMUM:
        raise ConfigurationError(
            f"iterations_log2 {iterations_log2} does not fit the {ITERATIONS_FIELD_BYTES}-byte envelope field."
        )
    if iterations_log2 < PBKDF2_ITERATIONS_LOG2_MINIMUM:
        logger.warning(
            f"Number of iterations used for key stretching is too low (2^{iterations_log2}), "
            f"using default 2^{PBKDF2_ITERATIONS_LOG2_MINIMUM} instead."
        )
        iterations_log2 = PBKDF2_ITERATIONS_LOG2_MINIMUM

    use_compression = bool(use_compression)
    if use_compression and not compression.is_available():
        logger.warning("Compression not available, compression disabled.")
        use_compression = False

    iv_length, cipher_key_length = resolve_cipher_parameters()
    mac_length = resolve_mac_length()

    config = CodecConfig(
        iterations_log2=iterations_log2,
        use_compression=use_compression,
        reject_downgrade=bool(reject_downgrade),
        salt_length=PBKDF2_SALT_BYTES,
        iv_length=iv_length,
        cipher_key_length=cipher_key_length,
        mac_key_length=HMAC_KEY_BYTES,
        mac_length=mac_length,
    )
    logger.debug(f"Codec configured: {config}")
    return config
