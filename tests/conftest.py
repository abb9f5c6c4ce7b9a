"""Shared test fixtures for the mediaintake test suite."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from mediaintake.config import IntakeConfig
from mediaintake.models import AcceptPolicy
from mediaintake.transfer_api import UploadAPI, UploadTransport

Handler = Callable[[httpx.Request], httpx.Response]


def upload_ok(
    file_url: str = "/uploads/file-1.png",
    original_name: str = "photo.png",
    size: int = 2_097_152,
    mime: str = "image/png",
) -> dict:
    """Success payload in the upload endpoint's envelope."""
    return {
        "success": True,
        "data": {
            "filename": file_url.rsplit("/", 1)[-1],
            "originalName": original_name,
            "fileUrl": file_url,
            "fileSize": size,
            "mimeType": mime,
        },
    }


def make_upload_api(config: IntakeConfig, handler: Handler) -> UploadAPI:
    """UploadAPI whose HTTP client is backed by ``httpx.MockTransport``."""
    client = httpx.AsyncClient(
        base_url=config.api_base_url,
        transport=httpx.MockTransport(handler),
    )
    return UploadAPI(UploadTransport(config, client=client), config)


@pytest.fixture
def config() -> IntakeConfig:
    """Default test configuration with small chunks so progress is granular."""
    return IntakeConfig(chunk_size=1024)


@pytest.fixture
def policy() -> AcceptPolicy:
    """The stock widget policy: 50 MiB and the default accept list."""
    return IntakeConfig().policy()
