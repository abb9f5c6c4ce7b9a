"""External URL detection.

Decides whether a submitted string is a syntactically valid URL and
which hosting family it belongs to, so the normalizer knows which
rewrite (if any) applies.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from mediaintake.models import UrlSourceKind

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_WHITESPACE_RE = re.compile(r"\s")

# Schemes that always carry an authority component.
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

# Identifier alphabet shared by the hosting services we rewrite.
_ID = r"[A-Za-z0-9_-]+"

FILE_HOSTING_HOST = "drive.google.com"
FILE_HOSTING_ID_RE = re.compile(rf"/file/d/({_ID})")

VIDEO_WATCH_MARKER = "youtube.com/watch"
VIDEO_WATCH_ID_RE = re.compile(rf"[?&]v=({_ID})")
VIDEO_SHORT_ID_RE = re.compile(rf"youtu\.be/({_ID})")


def is_valid_url(text: str) -> bool:
    """Strict URL syntax check.

    The trimmed text must be non-empty, contain no whitespace, start with
    a valid scheme, parse with :func:`urllib.parse.urlsplit`, and -- for
    schemes such as ``http`` that require one -- name a host with a
    parseable port.
    """
    text = text.strip()
    if not text or _WHITESPACE_RE.search(text):
        return False

    scheme, sep, rest = text.partition(":")
    if not sep or not _SCHEME_RE.match(scheme):
        return False

    try:
        parts = urlsplit(text)
        # Accessing .port validates it and may raise ValueError.
        parts.port
    except ValueError:
        return False

    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname)
    return bool(rest)


def extract_file_hosting_id(url: str) -> str | None:
    """Return the file id of a ``drive.google.com/file/d/{id}`` URL."""
    if FILE_HOSTING_HOST not in url:
        return None
    match = FILE_HOSTING_ID_RE.search(url)
    return match.group(1) if match else None


def extract_video_id(url: str) -> str | None:
    """Return the video id of a ``watch?v={id}`` or ``youtu.be/{id}`` URL.

    Trailing ``&``-delimited tokens of the watch form and ``?``-delimited
    tokens of the short-link form are not part of the id.
    """
    if VIDEO_WATCH_MARKER in url:
        match = VIDEO_WATCH_ID_RE.search(url)
        if match:
            return match.group(1)
    match = VIDEO_SHORT_ID_RE.search(url)
    return match.group(1) if match else None


def detect_url_source(url: str) -> UrlSourceKind:
    """Classify *url* into a hosting family.

    Parameters
    ----------
    url:
        The (already trimmed) URL string.

    Returns
    -------
    UrlSourceKind
        ``FILE_HOSTING`` and ``VIDEO_HOSTING`` when an identifier can be
        extracted, ``DIRECT`` otherwise.
    """
    if extract_file_hosting_id(url):
        return UrlSourceKind.FILE_HOSTING
    if extract_video_id(url):
        return UrlSourceKind.VIDEO_HOSTING
    return UrlSourceKind.DIRECT
