"""Configuration for mediaintake.

:class:`IntakeConfig` is a dataclass that captures every tuneable knob of
the ingestion widget: where the upload endpoint lives, how relative file
paths are turned into dereferenceable URLs, the acceptance policy, and
the capability flags that select between the basic and extended widget
behaviours.

Two module-level constants hold the defaults of the acceptance policy:

* :data:`DEFAULT_ACCEPT` -- accepted types in ``accept`` attribute form.
* :data:`DEFAULT_MAX_SIZE_BYTES` -- 50 MiB.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from mediaintake.models import EXTERNAL_URL_LABEL, AcceptPolicy

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_ACCEPT = (
    "image/*,video/*,.pdf,.doc,.docx,.ppt,.pptx,.xls,.xlsx,.txt,.zip,.rar"
)
"""Images, videos, office documents, plain text and archives."""

DEFAULT_MAX_SIZE_BYTES = 50 * 1024 * 1024  # 50 MiB

DEFAULT_API_BASE_URL = "http://localhost:5000/api/v1"

DEFAULT_ASSET_ORIGIN = "http://localhost:5000"
"""Used when stripping the API prefix leaves nothing behind."""

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class IntakeConfig:
    """Complete configuration for a :class:`~mediaintake.widget.MediaIntake`.

    Every parameter has a default matching the stock widget, so an empty
    ``IntakeConfig()`` talks to a development server on localhost.

    Parameters
    ----------
    api_base_url:
        API root URL.  The upload endpoint is ``api_base_url + upload_path``.
    api_prefix:
        Suffix stripped from *api_base_url* to derive :attr:`asset_origin`.
    asset_base_url:
        Explicit static-asset origin.  Overrides the derivation.
    upload_path:
        Path of the multipart upload endpoint, relative to *api_base_url*.
    upload_field:
        Name of the multipart form field that carries the file.
    accept:
        Accepted types, comma separated: extensions (``.pdf``), MIME
        wildcards (``image/*``) or exact MIME types.
    max_size_bytes:
        Maximum accepted file size in bytes.
    allow_external_url:
        Offer the external-URL input mode.
    multiple:
        Accept several files per selection and upload them concurrently.
    max_concurrent_uploads:
        Upper bound on parallel uploads when *multiple* is enabled.
    external_label:
        Display label given to external-URL references.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    chunk_size:
        Bytes handed to the transport per write; progress is reported
        after each chunk.
    metrics:
        Optional :class:`~mediaintake.observability.MetricsHook`.
    debug_dump_payload:
        Write a redacted request/response summary to *stderr*.
    """

    # ── Endpoint ────────────────────────────────────────────────────────
    api_base_url: str = DEFAULT_API_BASE_URL

    api_prefix: str = "/api/v1"

    asset_base_url: str | None = None

    upload_path: str = "/courses/upload"

    upload_field: str = "file"

    # ── Acceptance policy ───────────────────────────────────────────────
    accept: str = DEFAULT_ACCEPT

    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES

    # ── Capabilities ────────────────────────────────────────────────────
    allow_external_url: bool = True

    multiple: bool = False

    max_concurrent_uploads: int = 4

    external_label: str = EXTERNAL_URL_LABEL

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    chunk_size: int = 64 * 1024

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        parsed = urlparse(self.api_base_url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(
                f"api_base_url must be an absolute http(s) URL, got {self.api_base_url!r}"
            )
        if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
            raise ValueError(
                f"api_base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect the bearer credential, or target localhost for testing."
            )

        if not self.upload_path.startswith("/"):
            raise ValueError(f"upload_path must start with '/', got {self.upload_path!r}")
        if not self.upload_field:
            raise ValueError("upload_field must be non-empty")
        if self.max_size_bytes <= 0:
            raise ValueError(f"max_size_bytes must be > 0, got {self.max_size_bytes}")
        if self.max_concurrent_uploads < 1:
            raise ValueError(
                f"max_concurrent_uploads must be >= 1, got {self.max_concurrent_uploads}"
            )
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")

    # -- derived values ----------------------------------------------------

    @property
    def upload_url(self) -> str:
        return self.api_base_url.rstrip("/") + self.upload_path

    @property
    def asset_origin(self) -> str:
        """Origin that relative paths returned by the upload endpoint are
        resolved against.

        Derived from :attr:`api_base_url` by stripping :attr:`api_prefix`
        when it is the URL's suffix, unless :attr:`asset_base_url` is set.
        """
        if self.asset_base_url:
            return self.asset_base_url.rstrip("/")
        base = self.api_base_url.rstrip("/")
        prefix = self.api_prefix.rstrip("/")
        if prefix and base.endswith(prefix):
            base = base[: -len(prefix)]
        return base.rstrip("/") or DEFAULT_ASSET_ORIGIN

    def policy(self) -> AcceptPolicy:
        """Build the :class:`AcceptPolicy` described by this config."""
        return AcceptPolicy.from_accept(self.accept, self.max_size_bytes)

    def __repr__(self) -> str:
        """Hide proxy credentials embedded in the proxy URL."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "http_proxy" and val:
                proxy = urlparse(val)
                if proxy.password:
                    val = val.replace(proxy.password, "****")
            parts.append(f"{f.name}={val!r}")
        return f"IntakeConfig({', '.join(parts)})"
