"""Async HTTP transport for the upload endpoint.

A transfer is a single multipart ``POST``:

1. Encode the multipart body with ``httpx`` (one file field).
2. Stream the encoded body in ``chunk_size`` pieces, reporting bytes
   sent after each piece.
3. On ``2xx`` -- return the parsed JSON body.
4. On ``401`` -- raise :class:`UnauthorizedError`.
5. On any other error status -- raise :class:`ServerError` carrying the
   server's error message when it sent one.
6. On any other ``httpx`` failure (connection, timeout, content
   decoding) -- raise :class:`NetworkFailureError`.

Nothing is retried; the caller decides what a failure means.
"""

from __future__ import annotations

import json as _json
import sys
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx

from mediaintake.config import IntakeConfig
from mediaintake.errors import NetworkFailureError, ServerError, UnauthorizedError
from mediaintake.observability import get_logger

log = get_logger("mediaintake.transport")

ProgressCallback = Callable[[int, int], None]
"""Called with ``(bytes_sent, bytes_total)`` as the request body streams."""

GENERIC_FAILURE_MESSAGE = "Upload failed"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_body(response: httpx.Response) -> Any:
    """Return the decoded JSON body, or ``None`` when it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any) -> str | None:
    """Pull a human-readable message out of an error payload."""
    if not isinstance(body, dict):
        return None
    for key in ("error", "message"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _raise_for_status(response: httpx.Response, url: str, had_credential: bool) -> None:
    """Raise the appropriate :class:`TransferError` subclass for an error
    status."""
    status = response.status_code
    body = _parse_body(response)
    server_message = _error_message(body)

    if status == 401:
        raise UnauthorizedError(
            message=server_message or "Not authorized to upload files",
            context={"status_code": status, "url": url, "had_credential": had_credential},
        )
    raise ServerError(
        message=server_message or f"{GENERIC_FAILURE_MESSAGE} (HTTP {status})",
        context={
            "status_code": status,
            "url": url,
            "body": body if body is not None else response.text[:500],
        },
    )


def _dump_payload(
    method: str,
    url: str,
    request_headers: dict[str, str],
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from mediaintake.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
        "request_headers": request_headers,
    }
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    safe_dump = redact(dump, token)
    print(
        _json.dumps(safe_dump, indent=2, default=str),
        file=sys.stderr,
    )


async def _stream_body(
    body: bytes,
    chunk_size: int,
    on_bytes: ProgressCallback | None,
) -> AsyncIterator[bytes]:
    """Yield *body* in chunks, reporting after each chunk is consumed."""
    total = len(body)
    sent = 0
    for offset in range(0, total, chunk_size):
        chunk = body[offset : offset + chunk_size]
        yield chunk
        sent += len(chunk)
        if on_bytes is not None:
            on_bytes(sent, total)


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class UploadTransport:
    """Asynchronous multipart transport with progress reporting.

    Parameters
    ----------
    config:
        An :class:`IntakeConfig` controlling base URL, timeout and proxy.
    client:
        An existing ``httpx.AsyncClient``.  When omitted the transport
        creates (and owns) one.
    """

    def __init__(
        self,
        config: IntakeConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.api_base_url.rstrip("/"),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    # -- public API --------------------------------------------------------

    async def post_file(
        self,
        path: str,
        *,
        field: str,
        file_name: str,
        data: bytes,
        media_type: str,
        token: str | None = None,
        on_bytes: ProgressCallback | None = None,
    ) -> Any:
        """Send *data* as the only file of a multipart ``POST``.

        Parameters
        ----------
        path:
            Endpoint path relative to the client's base URL.
        field:
            Multipart form field name.
        file_name:
            File name announced in the part's ``Content-Disposition``.
        data:
            Raw file bytes.
        media_type:
            Part ``Content-Type``; ``application/octet-stream`` when empty.
        token:
            Bearer credential.  No ``Authorization`` header is sent when
            ``None`` or empty.
        on_bytes:
            Progress callback, see :data:`ProgressCallback`.

        Returns
        -------
        Any
            Parsed JSON body of the ``2xx`` response (``None`` if empty).

        Raises
        ------
        UnauthorizedError
            On 401 responses.
        ServerError
            On any other non-``2xx`` response.
        NetworkFailureError
            On timeouts, connection-level failures and undecodable
            response bodies.
        """
        files = {field: (file_name, data, media_type or "application/octet-stream")}
        encoded = self._client.build_request("POST", path, files=files)
        body = encoded.read()

        headers = {
            "Content-Type": encoded.headers["Content-Type"],
            "Content-Length": str(len(body)),
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        request = self._client.build_request(
            "POST",
            path,
            content=_stream_body(body, self._config.chunk_size, on_bytes),
            headers=headers,
        )
        url = str(request.url)

        log.debug(
            "Sending upload request",
            extra={
                "extra_fields": {
                    "op": "post_file",
                    "url": url,
                    "file_name": file_name,
                    "body_bytes": len(body),
                    "authorized": bool(token),
                }
            },
        )

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as exc:
            log.warning(
                "Upload network error",
                extra={"extra_fields": {"op": "post_file", "url": url, "error": str(exc)}},
            )
            raise NetworkFailureError(
                message=str(exc) or GENERIC_FAILURE_MESSAGE,
                context={"url": url},
                cause=exc,
            ) from exc

        if self._config.debug_dump_payload:
            _dump_payload(
                "POST", url, dict(request.headers),
                response.status_code, _parse_body(response),
                token=token,
            )

        if not 200 <= response.status_code < 300:
            _raise_for_status(response, url, had_credential=bool(token))

        return _parse_body(response)

    async def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> UploadTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
