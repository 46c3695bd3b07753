"""Error taxonomy for compiling and bootstrapping a PostgreSQL service.

Every failure is fatal to the current activation. Nothing here is retried;
the process supervisor owns restart policy.
"""

from __future__ import annotations


class PgBootstrapError(Exception):
    """Base class for all pgbootstrap failures.

    Attributes:
        code: Stable machine-readable identifier, surfaced in ``ServiceError.code``.
        details: Diagnostic text from an external binary, if any.
    """

    code = "PGBOOTSTRAP_ERROR"

    def __init__(self, message: str, *, details: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class SerializationError(PgBootstrapError, TypeError):
    """A setting value is not a boolean, number, or string."""

    code = "SERIALIZATION_ERROR"


class SettingTypeConflict(PgBootstrapError, ValueError):
    """The same key was declared with values of two different kinds."""

    code = "SETTING_TYPE_CONFLICT"


class CheckFailed(PgBootstrapError):
    """The server binary rejected the compiled configuration document."""

    code = "CHECK_FAILED"


class InitializationFailed(PgBootstrapError):
    """``initdb`` exited non-zero; the data directory may be partially written."""

    code = "INITIALIZATION_FAILED"


class ConvergenceFailed(PgBootstrapError):
    """A symlink inside the data directory could not be (re)pointed."""

    code = "CONVERGENCE_FAILED"


class ExecFailed(PgBootstrapError):
    """The server binary could not replace the current process."""

    code = "EXEC_FAILED"
