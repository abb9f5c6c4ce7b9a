"""Helpers for rendering the registered references as a list.

The rendering surface itself is external; these functions only produce
the labels it shows for each entry.
"""

from __future__ import annotations

from dataclasses import dataclass

from mediaintake.models import (
    EXTERNAL_URL_LABEL,
    EXTERNAL_URL_MEDIA_TYPE,
    MediaReference,
    SourceKind,
)

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size_bytes: int) -> str:
    """Human-readable size with 1024-based units.

    ``0`` is the size of every external URL and renders as
    ``"External URL"``.  Values keep at most two decimals, without
    trailing zeros: ``1536 -> "1.5 KB"``.
    """
    if size_bytes < 0:
        raise ValueError(f"size_bytes must be >= 0, got {size_bytes}")
    if size_bytes == 0:
        return "External URL"
    unit = 0
    while unit < len(_SIZE_UNITS) - 1 and size_bytes >= 1024 ** (unit + 1):
        unit += 1
    value = f"{size_bytes / 1024 ** unit:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[unit]}"


def media_category(media_type: str) -> str:
    """Icon category: ``image``, ``video``, ``external`` or ``document``."""
    if media_type.startswith("image/"):
        return "image"
    if media_type.startswith("video/"):
        return "video"
    if media_type == EXTERNAL_URL_MEDIA_TYPE:
        return "external"
    return "document"


@dataclass(frozen=True)
class ReferenceRow:
    """Everything the list view shows for one registered reference."""

    label: str
    size_label: str
    category: str
    url: str
    is_external: bool


def describe(reference: MediaReference) -> ReferenceRow:
    return ReferenceRow(
        label=reference.original_name or EXTERNAL_URL_LABEL,
        size_label=format_file_size(reference.size_bytes),
        category=media_category(reference.media_type),
        url=reference.canonical_url,
        is_external=reference.source_kind == SourceKind.EXTERNAL_URL,
    )
