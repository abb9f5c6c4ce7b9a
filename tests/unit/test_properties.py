"""Property-based tests for mediaintake using Hypothesis.

These tests check properties of the pure pipeline functions over a wide
range of generated inputs.
"""

from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from mediaintake.errors import SizeExceededError
from mediaintake.intake.detect import is_valid_url
from mediaintake.intake.display import format_file_size
from mediaintake.intake.normalize import normalize_url
from mediaintake.intake.state import UploadSession, compute_percent
from mediaintake.intake.validate import check_candidate, matcher_accepts
from mediaintake.models import (
    AcceptPolicy,
    FileCandidate,
    MatcherKind,
    TypeMatcher,
    UploadStatus,
)

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

_id_st = st.text(alphabet=string.ascii_letters + string.digits + "_-", min_size=1, max_size=20)
_tail_st = st.text(alphabet=string.ascii_letters + string.digits + "=&?/._-", max_size=30)

_hosted_url_st = st.one_of(
    st.builds(lambda i, t: f"https://drive.google.com/file/d/{i}/view{t}", _id_st, _tail_st),
    st.builds(lambda i, t: f"https://www.youtube.com/watch?v={i}&{t}", _id_st, _tail_st),
    st.builds(lambda i, t: f"https://youtu.be/{i}?{t}", _id_st, _tail_st),
)

_any_url_st = st.one_of(
    _hosted_url_st,
    st.builds(
        lambda host, path: f"https://{host}.example.com/{path}",
        st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=10),
        _tail_st,
    ),
    st.text(max_size=60),
)

_media_type_st = st.sampled_from([
    "", "image/png", "image/jpeg", "video/mp4", "application/pdf",
    "text/plain", "application/zip", "imagery/png",
])


# ---------------------------------------------------------------------------
# URL normalization
# ---------------------------------------------------------------------------

@given(_any_url_st)
def test_normalize_is_idempotent(url):
    once = normalize_url(url)
    assert normalize_url(once) == once


@given(_hosted_url_st)
def test_hosted_urls_become_canonical(url):
    result = normalize_url(url)
    assert result.startswith((
        "https://drive.google.com/file/d/",
        "https://www.youtube.com/embed/",
    ))
    assert "?" not in result
    assert "&" not in result


@given(_hosted_url_st)
def test_canonical_forms_are_valid_urls(url):
    assert is_valid_url(normalize_url(url))


@given(st.text(max_size=40))
def test_is_valid_url_never_raises(text):
    is_valid_url(text)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@given(st.integers(min_value=1, max_value=10**9), st.integers(min_value=0, max_value=2 * 10**9))
def test_size_rejection_iff_over_limit(max_bytes, size):
    policy = AcceptPolicy.from_accept("image/*", max_bytes)
    candidate = FileCandidate(file_name="a.png", size_bytes=size, media_type="image/png")
    err = check_candidate(candidate, policy)
    assert (err is not None) == (size > max_bytes)
    if err is not None:
        assert isinstance(err, SizeExceededError)


@given(st.text(alphabet=string.ascii_letters, min_size=1, max_size=8), st.text(max_size=12))
def test_extension_match_ignores_case(ext, stem):
    matcher = TypeMatcher(MatcherKind.EXTENSION, "." + ext.lower())
    assert matcher_accepts(matcher, f"{stem}.{ext.upper()}", "")


@given(_media_type_st)
def test_wildcard_requires_slash_prefix(media_type):
    matcher = TypeMatcher(MatcherKind.WILDCARD, "image/*")
    assert matcher_accepts(matcher, "x", media_type) == media_type.startswith("image/")


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

@given(st.integers(min_value=0, max_value=10**6), st.integers(min_value=-5, max_value=10**6))
def test_compute_percent_bounded(loaded, total):
    assert 0 <= compute_percent(loaded, total) <= 100


@given(st.lists(st.integers(min_value=-50, max_value=150), max_size=30))
def test_progress_never_decreases(values):
    session = UploadSession()
    session.transition(UploadStatus.IN_PROGRESS)
    history = []
    for value in values:
        session.advance(value)
        history.append(session.progress_percent)
    assert history == sorted(history)


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

@given(st.integers(min_value=1, max_value=10**13))
def test_format_file_size_has_unit(size):
    label = format_file_size(size)
    value, unit = label.split(" ")
    assert unit in ("Bytes", "KB", "MB", "GB")
    if unit != "GB":
        assert float(value) <= 1024
