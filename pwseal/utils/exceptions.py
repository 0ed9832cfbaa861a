# exceptions.py
# -*- coding: utf-8 -*-
"""Custom exception classes for pwseal."""

class PwsealError(Exception):
    """Base class for library-specific errors."""
    pass

class ArgumentError(PwsealError):
    """Invalid argument passed by the caller (wrong type, out-of-range internal length)."""
    pass

class ConfigurationError(PwsealError):
    """Primitive parameters could not be resolved or a setting cannot be honoured. Fatal."""
    pass

class RandomnessUnavailableError(PwsealError):
    """The operating system could not provide secure random bytes. Fatal."""
    pass

class ParameterOutOfBoundsError(PwsealError):
    """Envelope is malformed or claims an iteration cost this instance does not trust."""
    pass

class AuthenticationError(PwsealError):
    """Authentication tag mismatch (wrong password or tampered data)."""
    pass

class DecryptionError(PwsealError):
    """The block cipher rejected the authenticated ciphertext."""
    pass

class DecompressionError(PwsealError):
    """The decrypted payload could not be decompressed."""
    pass
