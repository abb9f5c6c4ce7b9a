"""Tests for the error hierarchy."""

from __future__ import annotations

import pytest

from mediaintake.errors import (
    ErrorCode,
    IntakeValidationError,
    InvalidUrlError,
    MediaIntakeError,
    NetworkFailureError,
    ServerError,
    SizeExceededError,
    TransferError,
    UnauthorizedError,
    UnsupportedTypeError,
)


class TestHierarchy:
    @pytest.mark.parametrize(("cls", "base", "code"), [
        (SizeExceededError, IntakeValidationError, ErrorCode.SIZE_EXCEEDED),
        (UnsupportedTypeError, IntakeValidationError, ErrorCode.UNSUPPORTED_TYPE),
        (InvalidUrlError, IntakeValidationError, ErrorCode.INVALID_URL),
        (NetworkFailureError, TransferError, ErrorCode.NETWORK_FAILURE),
        (ServerError, TransferError, ErrorCode.SERVER_ERROR),
        (UnauthorizedError, ServerError, ErrorCode.UNAUTHORIZED),
    ])
    def test_subclass_codes(self, cls, base, code):
        err = cls(message="boom")
        assert isinstance(err, base)
        assert isinstance(err, MediaIntakeError)
        assert err.code == code
        assert str(err) == "boom"

    def test_validation_and_transfer_are_disjoint(self):
        assert not issubclass(IntakeValidationError, TransferError)
        assert not issubclass(TransferError, IntakeValidationError)

    def test_family_defaults(self):
        assert TransferError().code == ErrorCode.TRANSFER_ERROR
        assert TransferError().message == "Upload failed"
        assert IntakeValidationError().code == ErrorCode.VALIDATION_ERROR


class TestContextAndCause:
    def test_context_defaults_to_empty(self):
        assert SizeExceededError(message="x").context == {}

    def test_cause_chained(self):
        root = OSError("reset")
        err = NetworkFailureError(message="reset", cause=root)
        assert err.cause is root
        assert err.__cause__ is root

    def test_repr(self):
        err = InvalidUrlError(message="bad", context={"url": "x"})
        text = repr(err)
        assert text.startswith("InvalidUrlError(")
        assert "'bad'" in text
        assert "'url': 'x'" in text

    def test_error_code_is_str(self):
        assert ErrorCode.SERVER_ERROR == "SERVER_ERROR"
