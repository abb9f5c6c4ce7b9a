"""Tests for the upload endpoint wrapper."""

from __future__ import annotations

import httpx
import pytest
from conftest import make_upload_api, upload_ok

from mediaintake.config import IntakeConfig
from mediaintake.errors import ServerError


class TestUploadFile:
    async def test_unwraps_data_envelope(self, config):
        api = make_upload_api(config, lambda req: httpx.Response(200, json=upload_ok()))
        data = await api.upload_file("photo.png", b"abc", "image/png")
        assert data["fileUrl"] == "/uploads/file-1.png"
        assert data["originalName"] == "photo.png"

    async def test_bare_body_accepted(self, config):
        body = {"fileUrl": "/uploads/a.pdf"}
        api = make_upload_api(config, lambda req: httpx.Response(200, json=body))
        assert await api.upload_file("a.pdf", b"%PDF", "application/pdf") == body

    async def test_success_false_with_2xx(self, config):
        api = make_upload_api(
            config,
            lambda req: httpx.Response(200, json={"success": False, "error": "Quota exceeded"}),
        )
        with pytest.raises(ServerError, match="Quota exceeded"):
            await api.upload_file("a.png", b"a", "image/png")

    @pytest.mark.parametrize("body", [[1, 2], "ok"])
    async def test_non_object_body(self, config, body):
        api = make_upload_api(config, lambda req: httpx.Response(200, json=body))
        with pytest.raises(ServerError, match="not a JSON object"):
            await api.upload_file("a.png", b"a", "image/png")

    async def test_data_not_an_object(self, config):
        api = make_upload_api(
            config, lambda req: httpx.Response(200, json={"success": True, "data": "x"}),
        )
        with pytest.raises(ServerError, match="file metadata"):
            await api.upload_file("a.png", b"a", "image/png")

    async def test_uses_configured_path_and_field(self):
        config = IntakeConfig(upload_path="/media", upload_field="asset")
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=upload_ok())

        api = make_upload_api(config, handler)
        await api.upload_file("a.png", b"a", "image/png", token="t")
        assert captured[0].url.path == "/api/v1/media"
        assert b'name="asset"' in captured[0].content
        assert captured[0].headers["Authorization"] == "Bearer t"
