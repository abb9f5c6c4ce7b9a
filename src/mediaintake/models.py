"""Public data models for the mediaintake package.

This module contains every result type, enum, and supporting dataclass
referenced by the public API surface.  Reference types are frozen
dataclasses: once a piece of media has been accepted its reference is
never mutated in place.
"""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from mediaintake.errors import MediaIntakeError
    from mediaintake.intake.state import UploadSession


EXTERNAL_URL_MEDIA_TYPE = "external/url"
"""Sentinel ``media_type`` carried by every external-URL reference."""

EXTERNAL_URL_LABEL = "External File"
"""Default display label for external-URL references."""

_BYTES_PER_MB = 1024 * 1024


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SourceKind(str, Enum):
    """Where an accepted piece of media came from."""

    LOCAL_UPLOAD = "upload"
    """A local file transferred to the upload endpoint."""

    EXTERNAL_URL = "external"
    """A remote URL submitted by the user and normalized in place."""


class UploadStatus(str, Enum):
    """Lifecycle states of a single upload session."""

    IDLE = "idle"
    """Session created, no bytes sent yet."""

    IN_PROGRESS = "in_progress"
    """The request body is being streamed."""

    SUCCEEDED = "succeeded"
    """The server accepted the file and returned its location."""

    FAILED = "failed"
    """The transfer ended with a network or server error."""


class InputMode(str, Enum):
    """Which pipeline receives user input."""

    LOCAL_UPLOAD = "local_upload"
    EXTERNAL_URL = "external_url"


class MatcherKind(str, Enum):
    """How a single accept-policy entry is compared against a candidate."""

    EXTENSION = "extension"
    """``.pdf`` -- file name suffix, case-insensitive."""

    WILDCARD = "wildcard"
    """``image/*`` -- MIME prefix match."""

    EXACT = "exact"
    """``application/pdf`` -- full MIME equality."""


class UrlSourceKind(str, Enum):
    """Hosting family recognised by the URL normalizer."""

    FILE_HOSTING = "file_hosting"
    VIDEO_HOSTING = "video_hosting"
    DIRECT = "direct"


# ---------------------------------------------------------------------------
# Accept policy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypeMatcher:
    """One entry of an accept policy.

    Attributes
    ----------
    kind:
        How :attr:`pattern` is compared (see :class:`MatcherKind`).
    pattern:
        The raw entry, e.g. ``".pdf"``, ``"image/*"`` or ``"text/plain"``.
    """

    kind: MatcherKind
    pattern: str

    @classmethod
    def parse(cls, item: str) -> TypeMatcher:
        """Classify a single ``accept`` entry."""
        item = item.strip()
        if item.startswith("."):
            return cls(MatcherKind.EXTENSION, item)
        if item.endswith("/*"):
            return cls(MatcherKind.WILDCARD, item)
        return cls(MatcherKind.EXACT, item)


@dataclass(frozen=True)
class AcceptPolicy:
    """Size ceiling plus ordered type matchers governing what is ingestible.

    Attributes
    ----------
    max_bytes:
        Largest accepted file size, inclusive.
    matchers:
        Evaluated in order; the first satisfied matcher accepts the
        candidate.
    """

    max_bytes: int
    matchers: tuple[TypeMatcher, ...] = ()

    def __post_init__(self) -> None:
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be > 0, got {self.max_bytes}")

    @classmethod
    def from_accept(cls, accept: str, max_bytes: int) -> AcceptPolicy:
        """Build a policy from an HTML-style ``accept`` string.

        Items are comma separated and trimmed; empty items are dropped.
        """
        matchers = tuple(
            TypeMatcher.parse(item) for item in accept.split(",") if item.strip()
        )
        return cls(max_bytes=max_bytes, matchers=matchers)

    @classmethod
    def from_megabytes(cls, accept: str, max_mb: float) -> AcceptPolicy:
        return cls.from_accept(accept, int(max_mb * _BYTES_PER_MB))

    @property
    def max_megabytes(self) -> float:
        return self.max_bytes / _BYTES_PER_MB

    @property
    def accept(self) -> str:
        """The policy rendered back to an ``accept`` attribute value."""
        return ",".join(m.pattern for m in self.matchers)


# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------

@dataclass
class FileCandidate:
    """A local file offered by the user via drag-and-drop or the picker.

    Attributes
    ----------
    file_name:
        Base name shown to the user and sent as the multipart file name.
    size_bytes:
        Declared size of the file.
    media_type:
        Declared MIME type.  May be empty when the platform cannot tell.
    content:
        The file bytes, or a path to read them from at transfer time.
    """

    file_name: str
    size_bytes: int
    media_type: str
    content: bytes | str | os.PathLike[str] = b""

    @classmethod
    def from_path(
        cls,
        path: str | os.PathLike[str],
        media_type: str | None = None,
    ) -> FileCandidate:
        """Describe a file on disk without reading it."""
        p = Path(path)
        if media_type is None:
            guessed, _ = mimetypes.guess_type(p.name)
            media_type = guessed or ""
        return cls(
            file_name=p.name,
            size_bytes=p.stat().st_size,
            media_type=media_type,
            content=p,
        )

    @classmethod
    def from_bytes(cls, file_name: str, data: bytes, media_type: str = "") -> FileCandidate:
        return cls(
            file_name=file_name,
            size_bytes=len(data),
            media_type=media_type,
            content=data,
        )

    def read(self) -> bytes:
        """Return the file bytes, reading from disk when needed."""
        if isinstance(self.content, (bytes, bytearray)):
            return bytes(self.content)
        return Path(self.content).read_bytes()


# ---------------------------------------------------------------------------
# Media references (closed tagged union)
# ---------------------------------------------------------------------------

def _check_reference(canonical_url: str, size_bytes: int) -> None:
    if not canonical_url:
        raise ValueError("canonical_url must be non-empty")
    if size_bytes < 0:
        raise ValueError(f"size_bytes must be >= 0, got {size_bytes}")


@dataclass(frozen=True)
class LocalUploadReference:
    """A file that was uploaded and is served from the asset origin.

    Attributes
    ----------
    original_name:
        The source file name.
    size_bytes:
        Size reported by the server (or the candidate when omitted).
    media_type:
        MIME type reported by the server (or the candidate's).
    canonical_url:
        Absolute URL of the stored file.
    stored_name:
        File name assigned by the server; empty when not reported.
    """

    original_name: str
    size_bytes: int
    media_type: str
    canonical_url: str
    stored_name: str = ""
    source_kind: SourceKind = field(default=SourceKind.LOCAL_UPLOAD, init=False)

    def __post_init__(self) -> None:
        _check_reference(self.canonical_url, self.size_bytes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.source_kind.value,
            "filename": self.stored_name,
            "originalName": self.original_name,
            "fileUrl": self.canonical_url,
            "fileSize": self.size_bytes,
            "mimeType": self.media_type,
        }


@dataclass(frozen=True)
class ExternalUrlReference:
    """A normalized external URL.  Size is always ``0`` and the media
    type is the ``external/url`` sentinel."""

    canonical_url: str
    original_name: str = EXTERNAL_URL_LABEL
    size_bytes: int = field(default=0, init=False)
    media_type: str = field(default=EXTERNAL_URL_MEDIA_TYPE, init=False)
    source_kind: SourceKind = field(default=SourceKind.EXTERNAL_URL, init=False)

    def __post_init__(self) -> None:
        _check_reference(self.canonical_url, self.size_bytes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.source_kind.value,
            "originalName": self.original_name,
            "fileUrl": self.canonical_url,
            "fileSize": self.size_bytes,
            "mimeType": self.media_type,
        }


MediaReference = Union[LocalUploadReference, ExternalUrlReference]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class TransferSucceeded:
    """Terminal result of an upload that the server accepted."""

    reference: LocalUploadReference
    session: UploadSession


@dataclass
class TransferFailed:
    """Terminal result of an upload that ended in a transfer error."""

    error: MediaIntakeError
    session: UploadSession

    @property
    def reason(self) -> str:
        return self.error.message


TransferOutcome = Union[TransferSucceeded, TransferFailed]


@dataclass
class IngestResult:
    """What happened to one user submission (file or URL).

    Exactly one of :attr:`reference` and :attr:`error` is set.
    """

    source: str
    reference: MediaReference | None = None
    error: MediaIntakeError | None = None

    @property
    def ok(self) -> bool:
        return self.reference is not None
