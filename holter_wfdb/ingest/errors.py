"""Parse failures.

Every failure derives from ValueError, so callers that already guard reader
calls with ``except ValueError`` keep working. The subclasses carry the
offending values as attributes in addition to the message.
"""

from __future__ import annotations

from typing import Optional


class HolterParseError(ValueError):
    """Base class of all header/binary parse failures."""


class HeaderFormatError(HolterParseError):
    """A header token is missing, non-numeric, or not of the expected shape."""

    def __init__(self, message: str, *, token: Optional[str] = None, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.token = token
        self.line_number = line_number


class InsufficientDataError(HolterParseError):
    """The binary buffer is shorter than num_signals * num_samples * 2 bytes."""

    def __init__(self, expected_bytes: int, actual_bytes: int):
        super().__init__(
            f"Insufficient sample data: expected {expected_bytes} bytes but found {actual_bytes} bytes."
        )
        self.expected_bytes = int(expected_bytes)
        self.actual_bytes = int(actual_bytes)


class MetadataMismatchError(HolterParseError):
    """Fewer signal descriptors than the declared channel count."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Metadata declares {expected} signals but only {actual} signal descriptors are present."
        )
        self.expected = int(expected)
        self.actual = int(actual)


class ZeroGainError(HolterParseError):
    """A channel has gain == 0 and the decoder was asked to reject it."""

    def __init__(self, channel: int):
        super().__init__(f"Signal {channel} has gain 0; calibrated values would be non-finite.")
        self.channel = int(channel)


class RecordParseError(HolterParseError):
    """
    Failure of one stage of parse(), with the stage name attached.

    stage: 'header' or 'binary'.
    cause: the underlying HolterParseError (also chained as __cause__).
    """

    def __init__(self, stage: str, cause: HolterParseError, record_name: Optional[str] = None):
        where = f"{stage} stage failed"
        if record_name:
            where += f" for record '{record_name}'"
        super().__init__(f"{where}: {cause}")
        self.stage = stage
        self.cause = cause
        self.record_name = record_name
