# constants.py
# -*- coding: utf-8 -*-
"""Fixed algorithm policy for pwseal.

Every choice here is part of the envelope format. Changing one of them makes
previously produced envelopes undecryptable, so none of them is exposed as a
constructor option.
"""

# --- Key Derivation Parameters (PBKDF2) ---
PBKDF2_HASH_NAME: str = "sha256"        # Hash used inside the PBKDF2 HMAC
PBKDF2_ITERATIONS_LOG2_MINIMUM: int = 12  # Safety floor: 2^12 = 4096 iterations
PBKDF2_SALT_BYTES: int = 16             # 128-bit salt
PBKDF2_BLOCK_COUNT: int = 1             # One block: output length == hash output length

# The iteration count is stored as its log2 in a native-endian signed short
ITERATIONS_FIELD_FORMAT: str = "=h"
ITERATIONS_FIELD_BYTES: int = 2
ITERATIONS_LOG2_FIELD_MAXIMUM: int = 0x7FFF  # Largest value the field can hold

# --- Key Expansion Parameters (HKDF-Expand) ---
HKDF_HASH_NAME: str = "sha256"
HKDF_HASH_BYTES: int = 32
HKDF_MAX_BLOCKS: int = 255  # RFC 5869: L <= 255 * HashLen

# Domain-separation labels, one per sub-key purpose. They must differ.
CIPHER_KEY_INFO: bytes = b"EncryptionKey"
HMAC_KEY_INFO: bytes = b"AuthenticationKey"

# --- Cipher Parameters ---
CIPHER_SEGMENT_BITS: int = 8       # CFB-8: ciphertext length == plaintext length

# --- Authentication Parameters ---
HMAC_HASH_NAME: str = "sha256"
HMAC_KEY_BYTES: int = 32

# --- Compression ---
COMPRESSION_LEVEL: int = 9  # zlib, maximum compression
