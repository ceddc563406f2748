"""Exception hierarchy for sdk-diagnostics.

All exceptions derive from DiagnosticsError, enabling broad catch patterns
at the SDK boundary. Note that most diagnostics failures are never raised at
all: capacity overflow, disabled contexts and malformed sampling-rate updates
degrade silently.
"""


class DiagnosticsError(Exception):
    """Base exception for all sdk-diagnostics errors."""


class ConfigValidationError(DiagnosticsError):
    """Diagnostics options validation failed.

    Raised when option overrides contain unknown keys or fail type
    validation.
    """


class MarkerPayloadError(DiagnosticsError, ValueError):
    """A marker payload does not match its operation's schema.

    Raised at marker construction time when a caller supplies a field that is
    not valid for the ``(operation, step, action)`` being recorded, omits a
    required field, or passes a value of the wrong type.
    """


class UnknownDiagnosticsTypeError(DiagnosticsError, AssertionError):
    """A diagnostics type outside the closed enumeration reached sampling.

    Every legitimate call site passes one of the known types, so this is a
    programming error rather than a recoverable condition.
    """
