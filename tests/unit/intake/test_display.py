"""Tests for list-view labels."""

from __future__ import annotations

import pytest

from mediaintake.intake.display import describe, format_file_size, media_category
from mediaintake.models import ExternalUrlReference, LocalUploadReference


class TestFormatFileSize:
    @pytest.mark.parametrize(("size", "expected"), [
        (0, "External URL"),
        (1, "1 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (2_097_152, "2 MB"),
        (1_234_567, "1.18 MB"),
        (5 * 1024 ** 3, "5 GB"),
        (3 * 1024 ** 4, "3072 GB"),
    ])
    def test_labels(self, size, expected):
        assert format_file_size(size) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            format_file_size(-1)


class TestMediaCategory:
    @pytest.mark.parametrize(("media_type", "expected"), [
        ("image/png", "image"),
        ("video/mp4", "video"),
        ("external/url", "external"),
        ("application/pdf", "document"),
        ("", "document"),
    ])
    def test_categories(self, media_type, expected):
        assert media_category(media_type) == expected


class TestDescribe:
    def test_local_upload(self):
        row = describe(LocalUploadReference(
            original_name="photo.png",
            size_bytes=2_097_152,
            media_type="image/png",
            canonical_url="http://localhost:5000/uploads/x.png",
        ))
        assert row.label == "photo.png"
        assert row.size_label == "2 MB"
        assert row.category == "image"
        assert not row.is_external

    def test_external(self):
        row = describe(ExternalUrlReference("https://www.youtube.com/embed/abc123"))
        assert row.label == "External File"
        assert row.size_label == "External URL"
        assert row.category == "external"
        assert row.is_external
        assert row.url == "https://www.youtube.com/embed/abc123"
