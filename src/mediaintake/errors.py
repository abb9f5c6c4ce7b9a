"""Full error hierarchy for the mediaintake package.

Every public error class inherits from MediaIntakeError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Two families sit under the base:

* :class:`IntakeValidationError` -- raised synchronously before any
  network activity (size, type, URL syntax).
* :class:`TransferError` -- raised by the transport while an upload is
  in flight.  The transfer manager catches these at its boundary and
  turns them into a failed outcome.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    SIZE_EXCEEDED = "SIZE_EXCEEDED"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    INVALID_URL = "INVALID_URL"
    TRANSFER_ERROR = "TRANSFER_ERROR"
    NETWORK_FAILURE = "NETWORK_FAILURE"
    SERVER_ERROR = "SERVER_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class MediaIntakeError(Exception):
    """Base exception for all mediaintake errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A user-presentable description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Validation errors (raised before any network call)
# ---------------------------------------------------------------------------

class IntakeValidationError(MediaIntakeError):
    """Base class for candidates rejected by the acceptance policy.

    Context varies by subclass.
    """

    def __init__(
        self,
        code: str = ErrorCode.VALIDATION_ERROR,
        message: str = "Validation error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class SizeExceededError(IntakeValidationError):
    """The candidate file is larger than the policy's maximum.

    Context keys: ``file_name``, ``size_bytes``, ``max_bytes``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.SIZE_EXCEEDED,
            message=message,
            context=context,
            cause=cause,
        )


class UnsupportedTypeError(IntakeValidationError):
    """No matcher of the accept policy is satisfied by the candidate.

    Context keys: ``file_name``, ``media_type``, ``accepted``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_TYPE,
            message=message,
            context=context,
            cause=cause,
        )


class InvalidUrlError(IntakeValidationError):
    """A submitted external URL is empty or fails the URL syntax check.

    Context keys: ``url``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_URL,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Transfer errors (raised while an upload is in flight)
# ---------------------------------------------------------------------------

class TransferError(MediaIntakeError):
    """Base class for failures during an upload request.

    Context varies by subclass.
    """

    def __init__(
        self,
        code: str = ErrorCode.TRANSFER_ERROR,
        message: str = "Upload failed",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class NetworkFailureError(TransferError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``url``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_FAILURE,
            message=message,
            context=context,
            cause=cause,
        )


class ServerError(TransferError):
    """The upload endpoint answered with an error status or an unusable body.

    Context keys: ``status_code``, ``url``, ``body``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.SERVER_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class UnauthorizedError(ServerError):
    """The upload endpoint returned 401 -- the bearer credential was
    missing, invalid, or expired.

    Context keys: ``status_code``, ``url``, ``had_credential``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.UNAUTHORIZED,
        )
