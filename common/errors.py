# common/errors.py
"""
Error taxonomy for the code engine.

All exceptions inherit from ECCError (itself a ValueError) so callers that
already catch ValueError keep working.
"""


class ECCError(ValueError):
    """Base exception for all code-engine errors."""
    pass


class InvalidInput(ECCError):
    """Raised when a word handed to encode() has the wrong length or non-binary characters."""
    pass


class InvalidConfiguration(ECCError):
    """Raised when a code (or channel) is constructed with an out-of-range parameter."""
    pass
