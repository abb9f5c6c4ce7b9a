"""Candidate validation: size and type checks.

Checks that a file offered by the user conforms to the configured
acceptance policy before the transfer manager sees it.  Pure functions;
nothing here touches the network or the filesystem.
"""

from __future__ import annotations

from mediaintake.errors import (
    IntakeValidationError,
    SizeExceededError,
    UnsupportedTypeError,
)
from mediaintake.models import AcceptPolicy, FileCandidate, MatcherKind, TypeMatcher


def matcher_accepts(matcher: TypeMatcher, file_name: str, media_type: str) -> bool:
    """Return ``True`` if *matcher* is satisfied by the candidate.

    * extension -- ``file_name`` ends with the pattern, case-insensitive;
    * wildcard (``type/*``) -- ``media_type`` starts with ``type/``;
    * exact -- ``media_type`` equals the pattern.
    """
    if matcher.kind == MatcherKind.EXTENSION:
        return file_name.lower().endswith(matcher.pattern.lower())
    if matcher.kind == MatcherKind.WILDCARD:
        prefix = matcher.pattern[:-1]  # keep the slash: "image/"
        return media_type.startswith(prefix)
    return media_type == matcher.pattern


def _format_limit(max_bytes: int) -> str:
    """Size limit for the rejection message: ``50MB``, ``512KB``, ``1000 bytes``."""
    for unit, factor in (("MB", 1024 * 1024), ("KB", 1024)):
        if max_bytes >= factor:
            value = f"{max_bytes / factor:.2f}".rstrip("0").rstrip(".")
            return f"{value}{unit}"
    return f"{max_bytes} bytes"


def validate_candidate(candidate: FileCandidate, policy: AcceptPolicy) -> TypeMatcher:
    """Validate a candidate's size and type against *policy*.

    Parameters
    ----------
    candidate:
        The file offered by the user.
    policy:
        Size ceiling and ordered type matchers.

    Returns
    -------
    TypeMatcher
        The first matcher that accepted the candidate.

    Raises
    ------
    SizeExceededError
        If ``candidate.size_bytes`` is greater than ``policy.max_bytes``.
    UnsupportedTypeError
        If no matcher is satisfied.
    """
    if candidate.size_bytes > policy.max_bytes:
        raise SizeExceededError(
            message=f"File size must be less than {_format_limit(policy.max_bytes)}",
            context={
                "file_name": candidate.file_name,
                "size_bytes": candidate.size_bytes,
                "max_bytes": policy.max_bytes,
            },
        )

    for matcher in policy.matchers:
        if matcher_accepts(matcher, candidate.file_name, candidate.media_type):
            return matcher

    raise UnsupportedTypeError(
        message="File type not supported",
        context={
            "file_name": candidate.file_name,
            "media_type": candidate.media_type,
            "accepted": [m.pattern for m in policy.matchers],
        },
    )


def check_candidate(
    candidate: FileCandidate, policy: AcceptPolicy
) -> IntakeValidationError | None:
    """Like :func:`validate_candidate` but returns the rejection instead
    of raising it.  ``None`` means the candidate is accepted."""
    try:
        validate_candidate(candidate, policy)
    except IntakeValidationError as exc:
        return exc
    return None
