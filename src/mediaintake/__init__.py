"""mediaintake -- attach local files or external URLs to a parent record.

Public re-exports
-----------------

* **Widget:** :class:`MediaIntake`
* **Configuration:** :class:`IntakeConfig`
* **Credentials:** :class:`StaticCredentialProvider`,
  :class:`SessionStoreCredentialProvider`
* **Errors:** Every :class:`MediaIntakeError` subclass and :class:`ErrorCode`
* **Models:** References, candidates, policies, results, and enums

Usage::

    from mediaintake import FileCandidate, IntakeConfig, MediaIntake

    def attached(url, reference):
        print("attached", url)

    intake = MediaIntake(attached, config=IntakeConfig(multiple=True))
    await intake.drop([FileCandidate.from_path("slides.pdf")])

    intake.toggle_mode()
    intake.submit_url("https://youtu.be/abc123?si=xyz")
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from mediaintake.config import (
    DEFAULT_ACCEPT,
    DEFAULT_MAX_SIZE_BYTES,
    IntakeConfig,
)

# ── Credentials ─────────────────────────────────────────────────────────
from mediaintake.credentials import (
    CredentialProvider,
    SessionStoreCredentialProvider,
    StaticCredentialProvider,
)

# ── Errors ──────────────────────────────────────────────────────────────
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

# ── Pipeline ────────────────────────────────────────────────────────────
from mediaintake.intake import (
    InputModeController,
    ReferenceRegistry,
    TransferManager,
    UploadSession,
    accept_url,
    normalize_url,
    validate_candidate,
)

# ── Models ──────────────────────────────────────────────────────────────
from mediaintake.models import (
    EXTERNAL_URL_MEDIA_TYPE,
    AcceptPolicy,
    ExternalUrlReference,
    FileCandidate,
    IngestResult,
    InputMode,
    LocalUploadReference,
    MatcherKind,
    MediaReference,
    SourceKind,
    TransferFailed,
    TransferOutcome,
    TransferSucceeded,
    TypeMatcher,
    UploadStatus,
    UrlSourceKind,
)

# ── Widget ──────────────────────────────────────────────────────────────
from mediaintake.widget import MediaIntake

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ACCEPT",
    "DEFAULT_MAX_SIZE_BYTES",
    "EXTERNAL_URL_MEDIA_TYPE",
    "AcceptPolicy",
    "CredentialProvider",
    "ErrorCode",
    "ExternalUrlReference",
    "FileCandidate",
    "IngestResult",
    "InputMode",
    "InputModeController",
    "IntakeConfig",
    "IntakeValidationError",
    "InvalidUrlError",
    "LocalUploadReference",
    "MatcherKind",
    "MediaIntake",
    "MediaIntakeError",
    "MediaReference",
    "NetworkFailureError",
    "ReferenceRegistry",
    "ServerError",
    "SessionStoreCredentialProvider",
    "SizeExceededError",
    "SourceKind",
    "StaticCredentialProvider",
    "TransferError",
    "TransferFailed",
    "TransferManager",
    "TransferOutcome",
    "TransferSucceeded",
    "TypeMatcher",
    "UnauthorizedError",
    "UnsupportedTypeError",
    "UploadSession",
    "UploadStatus",
    "UrlSourceKind",
    "__version__",
    "accept_url",
    "normalize_url",
    "validate_candidate",
]
