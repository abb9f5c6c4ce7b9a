"""External URL normalization.

Rewrites links to known hosting services into their embeddable form:

* file hosting -- ``https://drive.google.com/file/d/{id}/...`` becomes
  ``https://drive.google.com/file/d/{id}/preview``;
* video hosting -- ``https://www.youtube.com/watch?v={id}&...`` and
  ``https://youtu.be/{id}?...`` become
  ``https://www.youtube.com/embed/{id}``.

Anything else passes through unchanged (after trimming).  The canonical
forms are fixed points, so normalizing twice is the same as once.
"""

from __future__ import annotations

from mediaintake.errors import InvalidUrlError
from mediaintake.models import UrlSourceKind

from .detect import detect_url_source, extract_file_hosting_id, extract_video_id, is_valid_url

FILE_PREVIEW_TEMPLATE = "https://drive.google.com/file/d/{id}/preview"
VIDEO_EMBED_TEMPLATE = "https://www.youtube.com/embed/{id}"

INVALID_URL_MESSAGE = "Please enter a valid URL"


def normalize_url(raw_url: str) -> str:
    """Return the canonical, embeddable form of *raw_url*.

    Total: never raises.  Callers are expected to have rejected malformed
    input with :func:`~mediaintake.intake.detect.is_valid_url` first.
    """
    url = raw_url.strip()
    kind = detect_url_source(url)

    if kind == UrlSourceKind.FILE_HOSTING:
        file_id = extract_file_hosting_id(url)
        return FILE_PREVIEW_TEMPLATE.format(id=file_id)
    if kind == UrlSourceKind.VIDEO_HOSTING:
        video_id = extract_video_id(url)
        return VIDEO_EMBED_TEMPLATE.format(id=video_id)
    return url


def accept_url(raw_url: str) -> str:
    """Check *raw_url* and return its canonical form.

    Raises
    ------
    InvalidUrlError
        If the text is empty or fails the URL syntax check.  No
        normalization is attempted in that case.
    """
    if not raw_url.strip() or not is_valid_url(raw_url):
        raise InvalidUrlError(
            message=INVALID_URL_MESSAGE,
            context={"url": raw_url[:200]},
        )
    return normalize_url(raw_url)
