"""Exception types raised by the position codec.

Construction problems are fatal configuration defects. Everything else is
recoverable and tells the caller what to do next: a malformed patch means
the caller sent the wrong shape, an unrecognized window means the pattern
should be rescanned.
"""

from __future__ import annotations


class CodecError(Exception):
    """Base class for all codec errors."""


class ConfigurationInvariantViolation(CodecError):
    """The configured sequences cannot guarantee unique windows."""


class DecodeError(CodecError, ValueError):
    """A patch could not be decoded into a position."""


class MalformedPatch(DecodeError):
    """The patch has the wrong dimensions or holds invalid values."""


class AmbiguousOrUnknownWindow(DecodeError):
    """The observed windows do not identify exactly one position."""


class OutOfBounds(CodecError, IndexError):
    """A requested block does not fit inside the matrix."""
