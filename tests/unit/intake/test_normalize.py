"""Tests for external URL detection and normalization."""

from __future__ import annotations

import pytest

from mediaintake.errors import ErrorCode, InvalidUrlError
from mediaintake.intake.detect import detect_url_source, is_valid_url
from mediaintake.intake.normalize import accept_url, normalize_url
from mediaintake.models import UrlSourceKind

# =========================================================================
# URL syntax check
# =========================================================================

class TestIsValidUrl:
    """Strict URL syntax check."""

    @pytest.mark.parametrize("url", [
        "https://example.com",
        "https://example.com/file.pdf?dl=1",
        "http://localhost:5000/uploads/a.png",
        "  https://youtu.be/abc123  ",
        "mailto:someone@example.com",
        "ftp://files.example.com/pub",
    ])
    def test_valid(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize("url", [
        "",
        "   ",
        "not a url",
        "example.com/path",
        "https://",
        "http://[",
        "https://exa mple.com",
        "https://example.com:99999",
        "1http://example.com",
        "mailto:",
    ])
    def test_invalid(self, url):
        assert not is_valid_url(url)


# =========================================================================
# Source detection
# =========================================================================

class TestDetectUrlSource:
    def test_file_hosting(self):
        url = "https://drive.google.com/file/d/ABC123/view"
        assert detect_url_source(url) == UrlSourceKind.FILE_HOSTING

    def test_drive_without_file_path_is_direct(self):
        url = "https://drive.google.com/drive/folders/XYZ"
        assert detect_url_source(url) == UrlSourceKind.DIRECT

    def test_video_watch(self):
        assert detect_url_source("https://www.youtube.com/watch?v=XYZ") == UrlSourceKind.VIDEO_HOSTING

    def test_video_short_link(self):
        assert detect_url_source("https://youtu.be/abc123") == UrlSourceKind.VIDEO_HOSTING

    def test_watch_without_id_is_direct(self):
        assert detect_url_source("https://www.youtube.com/watch?list=PL1") == UrlSourceKind.DIRECT

    def test_other_url_is_direct(self):
        assert detect_url_source("https://dropbox.com/s/abc/file.pdf") == UrlSourceKind.DIRECT


# =========================================================================
# Normalization
# =========================================================================

class TestNormalizeUrl:
    def test_file_hosting_view_to_preview(self):
        assert (
            normalize_url("https://drive.google.com/file/d/ABC123/view")
            == "https://drive.google.com/file/d/ABC123/preview"
        )

    def test_file_hosting_with_query(self):
        assert (
            normalize_url("https://drive.google.com/file/d/ABC123/view?usp=sharing")
            == "https://drive.google.com/file/d/ABC123/preview"
        )

    def test_watch_trailing_tokens_dropped(self):
        assert (
            normalize_url("https://www.youtube.com/watch?v=XYZ&t=30")
            == "https://www.youtube.com/embed/XYZ"
        )

    def test_watch_with_v_not_first(self):
        assert (
            normalize_url("https://www.youtube.com/watch?feature=share&v=XYZ")
            == "https://www.youtube.com/embed/XYZ"
        )

    def test_short_link_query_dropped(self):
        assert (
            normalize_url("https://youtu.be/abc123?si=xyz")
            == "https://www.youtube.com/embed/abc123"
        )

    def test_direct_url_unchanged(self):
        url = "https://dropbox.com/s/abc/file.pdf?dl=0"
        assert normalize_url(url) == url

    def test_whitespace_trimmed(self):
        assert normalize_url("  https://example.com/a.png\n") == "https://example.com/a.png"

    @pytest.mark.parametrize("url", [
        "https://drive.google.com/file/d/ABC123/view",
        "https://www.youtube.com/watch?v=XYZ&t=30",
        "https://youtu.be/abc123?si=xyz",
        "https://example.com/a.png",
    ])
    def test_canonical_form_is_fixed_point(self, url):
        once = normalize_url(url)
        assert normalize_url(once) == once

    def test_never_raises_on_garbage(self):
        assert normalize_url("not a url") == "not a url"


class TestAcceptUrl:
    def test_valid_url_normalized(self):
        assert accept_url("https://youtu.be/abc123?si=xyz") == "https://www.youtube.com/embed/abc123"

    @pytest.mark.parametrize("url", ["", "   ", "htp//broken", "just words"])
    def test_malformed_rejected(self, url):
        with pytest.raises(InvalidUrlError) as exc_info:
            accept_url(url)
        assert exc_info.value.code == ErrorCode.INVALID_URL
        assert exc_info.value.message == "Please enter a valid URL"
