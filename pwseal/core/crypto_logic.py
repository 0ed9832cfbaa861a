# crypto_logic.py
# -*- coding: utf-8 -*-
"""Core cryptographic primitives: random bytes, keyed hash, PBKDF2 and HKDF-Expand."""

import os
import hmac
import struct
import logging

from ..utils.constants import (
    PBKDF2_HASH_NAME,
    PBKDF2_SALT_BYTES,
    PBKDF2_BLOCK_COUNT,
    HKDF_HASH_NAME,
    HKDF_HASH_BYTES,
    HKDF_MAX_BLOCKS,
    HMAC_HASH_NAME,
)
from ..utils.exceptions import ArgumentError, PwsealError, RandomnessUnavailableError

logger = logging.getLogger(__name__)


def fetch_random_bytes(length: int) -> bytes:
    """
    Returns `length` cryptographically secure random bytes from the OS.

    Raises:
        RandomnessUnavailableError: If the OS entropy source cannot be read.
    """
    try:
        return os.urandom(length)
    except (NotImplementedError, OSError) as e:
        msg = f"Could not read {length} random bytes from the OS: {e}"
        logger.critical(msg)
        raise RandomnessUnavailableError(msg) from e


def generate_salt(length: int = PBKDF2_SALT_BYTES) -> bytes:
    """Generates a cryptographically secure random salt of `length` bytes."""
    return fetch_random_bytes(length)


def keyed_hash(key, message, hash_name: str = HMAC_HASH_NAME) -> bytes:
    """HMAC of `message` under `key`; output length is the hash's digest size."""
    return hmac.digest(key, message, hash_name)


def wipe(buffer) -> None:
    """Overwrite a mutable buffer with zeros. Best effort; `bytes` objects are left alone."""
    if isinstance(buffer, bytearray):
        buffer[:] = bytes(len(buffer))


def derive_key(password, salt: bytes, iterations_log2: int) -> bytearray:
    """
    Derives a key from the password and salt using PBKDF2-HMAC-SHA256 (RFC 2898).

    The iteration count is 2 ** iterations_log2. Only one output block is
    computed, so the result is exactly one hash output long (32 bytes).

    Args:
        password: The password bytes, used as the HMAC key.
        salt: The salt bytes.
        iterations_log2: Base-2 logarithm of the iteration count, >= 0.

    Returns:
        The derived key as a bytearray the caller should `wipe` after use.

    Raises:
        ArgumentError: If iterations_log2 is negative or not an int.
        PwsealError: If the underlying hash fails.
    """
    if isinstance(iterations_log2, bool) or not isinstance(iterations_log2, int) or iterations_log2 < 0:
        raise ArgumentError(f"iterations_log2 must be a non-negative int, got {iterations_log2!r}.")

    iteration_count = 1 << iterations_log2
    logger.debug(f"Deriving key using PBKDF2-HMAC-{PBKDF2_HASH_NAME.upper()} ({iteration_count} iterations)...")

    derived_key = bytearray()
    try:
        for block_index in range(1, PBKDF2_BLOCK_COUNT + 1):
            # U1 = PRF(P, S || INT(i)), block index as 4 bytes big-endian
            last = hmac.digest(password, bytes(salt) + struct.pack(">I", block_index), PBKDF2_HASH_NAME)
            xor_sum = int.from_bytes(last, "big")
            for _ in range(iteration_count - 1):
                last = hmac.digest(password, last, PBKDF2_HASH_NAME)
                xor_sum ^= int.from_bytes(last, "big")
            derived_key += xor_sum.to_bytes(len(last), "big")
    except (TypeError, ValueError) as e:
        msg = f"PBKDF2 key derivation failed: {e}"
        logger.error(msg)
        raise PwsealError(msg) from e

    logger.debug(f"Key derived successfully ({len(derived_key)} bytes).")
    return derived_key


def expand_key(pseudo_random_key, length: int, info: bytes = b"") -> bytearray:
    """
    Stretches a pseudo random key into `length` bytes with HKDF-Expand (RFC 5869).

    Only the Expand step is used; PBKDF2 takes the place of HKDF-Extract.
    `info` is the domain-separation label: each sub-key purpose needs its own.

    Raises:
        ArgumentError: If the key is shorter than one hash output,
            `length` is outside 0 .. 255 * hash output length, or
            `info` is not bytes-like.
    """
    if len(pseudo_random_key) < HKDF_HASH_BYTES:
        raise ArgumentError(
            f"Pseudo random key is too short: need at least {HKDF_HASH_BYTES} bytes, got {len(pseudo_random_key)}."
        )
    max_length = HKDF_MAX_BLOCKS * HKDF_HASH_BYTES
    if isinstance(length, bool) or not isinstance(length, int) or not 0 <= length <= max_length:
        raise ArgumentError(f"length must be an int between 0 and {max_length}, got {length!r}.")
    if not isinstance(info, (bytes, bytearray, memoryview)):
        raise ArgumentError(f"info must be bytes-like, got {type(info).__name__}.")
    info = bytes(info)

    output = bytearray()
    last = b""
    counter = 1
    while len(output) < length:
        # T(i) = HMAC(PRK, T(i-1) || info || i)
        last = hmac.digest(pseudo_random_key, last + info + bytes([counter]), HKDF_HASH_NAME)
        output += last
        counter += 1

    del output[length:]
    return output
