"""Ingestion pipeline: validate, normalize, transfer, and register media.

Exports
-------
validate_candidate / check_candidate
    Size and type checks against an :class:`AcceptPolicy`.
is_valid_url / detect_url_source
    URL syntax check and hosting-family classification.
normalize_url / accept_url
    Canonical embeddable form of an external URL.
UploadSession
    Per-transfer state machine with monotonic progress.
TransferManager
    Asynchronous upload with progress and a single terminal outcome.
InputModeController
    Local-upload / external-URL toggle.
ReferenceRegistry
    Ordered append/remove collection that notifies the owning context.
format_file_size / media_category / describe
    Labels for the list view.
"""

from .detect import detect_url_source, is_valid_url
from .display import ReferenceRow, describe, format_file_size, media_category
from .mode import InputModeController
from .normalize import accept_url, normalize_url
from .registry import ReferenceRegistry
from .state import UploadSession, compute_percent
from .transfer import TransferManager, build_reference, resolve_asset_url
from .validate import check_candidate, matcher_accepts, validate_candidate

__all__ = [
    "InputModeController",
    "ReferenceRegistry",
    "ReferenceRow",
    "TransferManager",
    "UploadSession",
    "accept_url",
    "build_reference",
    "check_candidate",
    "compute_percent",
    "describe",
    "detect_url_source",
    "format_file_size",
    "is_valid_url",
    "matcher_accepts",
    "media_category",
    "normalize_url",
    "resolve_asset_url",
    "validate_candidate",
]
