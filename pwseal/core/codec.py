# codec.py
# -*- coding: utf-8 -*-
"""
Password-based authenticated encryption of byte strings.

`SymmetricEncryption` ties the primitives together:

1. PBKDF2 turns (password, random salt, 2^iterations_log2) into a derived key.
2. HKDF-Expand splits the derived key into a cipher key and an HMAC key using
   two distinct labels.
3. The (optionally compressed) plaintext is encrypted with AES-CFB8 under a
   random IV.
4. An HMAC-SHA256 tag over salt, iteration field, IV and ciphertext is
   appended (Encrypt-then-MAC).

Decryption checks the stated iteration cost, verifies the tag in constant
time and only then decrypts.
"""

import hmac
import logging

from Crypto.Cipher import AES

from . import compression
from .config import CodecConfig, build_config
from .crypto_logic import derive_key, expand_key, fetch_random_bytes, generate_salt, keyed_hash, wipe
from .envelope import Envelope, pack_envelope, unpack_envelope
from ..utils.constants import (
    PBKDF2_ITERATIONS_LOG2_MINIMUM,
    CIPHER_KEY_INFO,
    HMAC_KEY_INFO,
    CIPHER_SEGMENT_BITS,
    HMAC_HASH_NAME,
)
from ..utils.exceptions import (
    ArgumentError,
    AuthenticationError,
    DecryptionError,
    ParameterOutOfBoundsError,
    PwsealError,
)

logger = logging.getLogger(__name__)

# Deliberately says nothing about which check failed.
AUTHENTICATION_FAILED_MESSAGE = "Authentication failed: wrong password or corrupted data."


def _coerce_password(password) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    if isinstance(password, (bytes, bytearray, memoryview)):
        return bytes(password)
    raise ArgumentError(f"password must be str or bytes-like, got {type(password).__name__}.")


def _coerce_data(data, name: str) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise ArgumentError(f"{name} must be bytes-like, got {type(data).__name__}.")


class SymmetricEncryption:
    """
    Encrypts and authenticates byte strings with a password.

    Example:
        crypto = SymmetricEncryption(20, use_compression=True)
        blob = crypto.encrypt(b"Never roll your own crypto.", "correct horse battery staple")
        crypto.decrypt(blob, "correct horse battery staple")

    Args:
        iterations_log2: PBKDF2 cost as a power of two. Values below the
            safety floor (12) are replaced by the floor with a warning. On
            decrypt it is also the highest cost an envelope may claim.
        use_compression: zlib-compress the plaintext before encrypting.
            Envelopes produced with and without compression are not
            interchangeable.
        reject_downgrade: Also reject envelopes claiming a lower cost than
            `iterations_log2`.

    Instances are immutable after construction and safe to share between threads.
    """

    def __init__(
        self,
        iterations_log2: int = PBKDF2_ITERATIONS_LOG2_MINIMUM,
        use_compression: bool = False,
        *,
        reject_downgrade: bool = False,
    ):
        self._config = build_config(iterations_log2, use_compression, reject_downgrade)

    @property
    def config(self) -> CodecConfig:
        return self._config

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(iterations_log2={self._config.iterations_log2}, "
            f"use_compression={self._config.use_compression})"
        )

    def _derive_sub_keys(self, password: bytes, salt: bytes, iterations_log2: int) -> tuple[bytearray, bytearray]:
        """Returns (cipher_key, hmac_key); the caller must wipe both."""
        derived_key = derive_key(password, salt, iterations_log2)
        try:
            cipher_key = expand_key(derived_key, self._config.cipher_key_length, CIPHER_KEY_INFO)
            try:
                hmac_key = expand_key(derived_key, self._config.mac_key_length, HMAC_KEY_INFO)
            except Exception:
                wipe(cipher_key)
                raise
        finally:
            wipe(derived_key)
        return cipher_key, hmac_key

    @staticmethod
    def _new_cipher(key: bytearray, iv: bytes):
        return AES.new(key, AES.MODE_CFB, iv=iv, segment_size=CIPHER_SEGMENT_BITS)

    def _check_iterations(self, iterations_log2: int) -> None:
        configured = self._config.iterations_log2
        if iterations_log2 > configured:
            msg = f"PBKDF2 iterations out of bounds: envelope claims 2^{iterations_log2}, at most 2^{configured} trusted."
            logger.error(msg)
            raise ParameterOutOfBoundsError(msg)
        if self._config.reject_downgrade and iterations_log2 < configured:
            msg = f"PBKDF2 iterations out of bounds: envelope claims 2^{iterations_log2}, at least 2^{configured} required."
            logger.error(msg)
            raise ParameterOutOfBoundsError(msg)

    def encrypt(self, plaintext, password) -> bytes:
        """
        Encrypts and authenticates `plaintext`.

        Returns:
            The envelope: salt || iterations_log2 || iv || ciphertext || tag.

        Raises:
            ArgumentError: If plaintext or password has an unsupported type.
            RandomnessUnavailableError: If no secure random bytes are available.
        """
        plaintext = _coerce_data(plaintext, "plaintext")
        password = _coerce_password(password)
        config = self._config

        salt = generate_salt(config.salt_length)
        cipher_key, hmac_key = self._derive_sub_keys(password, salt, config.iterations_log2)
        try:
            if config.use_compression:
                plaintext = compression.compress(plaintext)

            iv = fetch_random_bytes(config.iv_length)
            try:
                ciphertext = self._new_cipher(cipher_key, iv).encrypt(plaintext)
            except (TypeError, ValueError) as e:
                msg = f"Encryption failed: {e}"
                logger.error(msg)
                raise PwsealError(msg) from e

            envelope = Envelope(salt, config.iterations_log2, iv, ciphertext)
            tag = keyed_hash(hmac_key, envelope.authenticated_data, HMAC_HASH_NAME)
            result = pack_envelope(config, envelope._replace(tag=tag))
        finally:
            wipe(cipher_key)
            wipe(hmac_key)

        logger.debug(f"Encrypted {len(plaintext)} payload bytes into a {len(result)}-byte envelope.")
        return result

    def decrypt(self, envelope, password) -> bytes:
        """
        Verifies and decrypts an envelope produced by `encrypt`.

        Raises:
            ArgumentError: If envelope or password has an unsupported type.
            ParameterOutOfBoundsError: If the envelope is truncated or claims an
                untrusted iteration cost. PBKDF2 is not run in that case.
            AuthenticationError: If the tag does not verify. Nothing is decrypted.
            DecryptionError: If the cipher rejects the ciphertext.
            DecompressionError: If compression is on and the payload is not valid zlib data.
        """
        data = _coerce_data(envelope, "envelope")
        password = _coerce_password(password)
        config = self._config

        parsed = unpack_envelope(config, data)
        self._check_iterations(parsed.iterations_log2)

        cipher_key, hmac_key = self._derive_sub_keys(password, parsed.salt, parsed.iterations_log2)
        try:
            expected_tag = keyed_hash(hmac_key, parsed.authenticated_data, HMAC_HASH_NAME)
            if not hmac.compare_digest(expected_tag, parsed.tag):
                logger.error("Signature verification failed.")
                raise AuthenticationError(AUTHENTICATION_FAILED_MESSAGE)

            try:
                plaintext = self._new_cipher(cipher_key, parsed.iv).decrypt(parsed.ciphertext)
            except (TypeError, ValueError) as e:
                msg = f"Failed decrypting the cipher text: {e}"
                logger.error(msg)
                raise DecryptionError(msg) from e
        finally:
            wipe(cipher_key)
            wipe(hmac_key)

        if config.use_compression:
            plaintext = compression.decompress(plaintext)

        logger.debug(f"Decrypted {len(data)}-byte envelope into {len(plaintext)} bytes.")
        return plaintext
