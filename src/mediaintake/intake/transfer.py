"""Transfer manager: asynchronous upload of an accepted file.

Each call to :meth:`TransferManager.upload` owns one
:class:`~mediaintake.intake.state.UploadSession`, reports progress while
the request body streams, and finishes with exactly one terminal
outcome -- :class:`TransferSucceeded` or :class:`TransferFailed`.
Transfer errors never escape :meth:`upload`.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Mapping
from types import MappingProxyType
from urllib.parse import urlsplit

from mediaintake.config import IntakeConfig
from mediaintake.credentials import resolve_provider
from mediaintake.errors import ServerError, TransferError
from mediaintake.models import (
    FileCandidate,
    LocalUploadReference,
    TransferFailed,
    TransferOutcome,
    TransferSucceeded,
    UploadStatus,
)
from mediaintake.observability import NoopMetricsHook, get_logger
from mediaintake.transfer_api import UploadAPI, UploadTransport
from mediaintake.transfer_api.transport import GENERIC_FAILURE_MESSAGE

from .state import UploadSession, compute_percent

log = get_logger("mediaintake.transfer")

ProgressListener = Callable[[int], None]


def resolve_asset_url(path: str, origin: str) -> str:
    """Turn a path returned by the upload endpoint into an absolute URL.

    Absolute ``http``/``https`` URLs are returned unchanged; everything
    else is appended to *origin*.
    """
    parts = urlsplit(path)
    if parts.scheme in ("http", "https") and parts.netloc:
        return path
    if path.startswith("//"):
        return f"{urlsplit(origin).scheme}:{path}"
    origin = origin.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return origin + path


async def _read_candidate(candidate: FileCandidate) -> bytes:
    """Read the candidate's bytes in an executor so large files do not
    stall other in-flight uploads.

    Raises
    ------
    TransferError
        If the file cannot be read.
    """
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, candidate.read)
    except OSError as exc:
        raise TransferError(
            message=f"Could not read {candidate.file_name}: {exc}",
            context={"file_name": candidate.file_name},
            cause=exc,
        ) from exc


def build_reference(
    payload: Mapping[str, object],
    candidate: FileCandidate,
    origin: str,
) -> LocalUploadReference:
    """Build the reference for a completed upload.

    Metadata missing from *payload* falls back to the candidate's values.

    Raises
    ------
    ServerError
        If the payload carries no usable ``fileUrl``.
    """
    file_url = payload.get("fileUrl")
    if not isinstance(file_url, str) or not file_url.strip():
        raise ServerError(
            message="Upload response did not include a file URL",
            context={"body": dict(payload)},
        )

    size = payload.get("fileSize")
    if not isinstance(size, int) or isinstance(size, bool) or size < 0:
        size = candidate.size_bytes

    return LocalUploadReference(
        original_name=str(payload.get("originalName") or candidate.file_name),
        size_bytes=size,
        media_type=str(payload.get("mimeType") or candidate.media_type),
        canonical_url=resolve_asset_url(file_url.strip(), origin),
        stored_name=str(payload.get("filename") or ""),
    )


class TransferManager:
    """Upload accepted files to the configured endpoint.

    Parameters
    ----------
    config:
        Endpoint, origin, concurrency and metrics settings.
    upload_api:
        Endpoint wrapper.  Built from *config* when omitted.
    credentials:
        Credential provider (zero-argument callable returning a token or
        ``None``), or a fixed token string.  Called once per upload.
    """

    def __init__(
        self,
        config: IntakeConfig,
        upload_api: UploadAPI | None = None,
        credentials: Callable[[], str | None] | str | None = None,
    ) -> None:
        self._config = config
        self._api = upload_api or UploadAPI(UploadTransport(config), config)
        self._credentials = resolve_provider(credentials)
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._semaphore = asyncio.Semaphore(config.max_concurrent_uploads)
        self._active: dict[str, UploadSession] = {}

    @property
    def active_sessions(self) -> Mapping[str, UploadSession]:
        """In-flight sessions keyed by session id (read-only view)."""
        return MappingProxyType(self._active)

    async def upload(
        self,
        candidate: FileCandidate,
        on_progress: ProgressListener | None = None,
    ) -> TransferOutcome:
        """Upload *candidate* and return the terminal outcome.

        Parameters
        ----------
        candidate:
            A file that already passed validation.
        on_progress:
            Called with each new, strictly higher percentage while the
            body streams.  Never called after the outcome is returned.

        Returns
        -------
        TransferSucceeded | TransferFailed
            Network and server failures are returned, not raised.
        """
        session = UploadSession(candidate.file_name)
        self._active[session.session_id] = session
        try:
            async with self._semaphore:
                return await self._run(session, candidate, on_progress)
        finally:
            self._active.pop(session.session_id, None)

    async def _run(
        self,
        session: UploadSession,
        candidate: FileCandidate,
        on_progress: ProgressListener | None,
    ) -> TransferOutcome:
        session.transition(UploadStatus.IN_PROGRESS)
        token = self._credentials()
        t0 = time.monotonic()

        log.info(
            "Upload started",
            extra={
                "extra_fields": {
                    "op": "upload",
                    "session_id": session.session_id,
                    "file_name": candidate.file_name,
                    "size_bytes": candidate.size_bytes,
                    "authorized": bool(token),
                }
            },
        )

        def on_bytes(sent: int, total: int) -> None:
            if session.advance(compute_percent(sent, total)) and on_progress is not None:
                on_progress(session.progress_percent)

        try:
            data = await _read_candidate(candidate)
            try:
                payload = await self._api.upload_file(
                    candidate.file_name,
                    data,
                    candidate.media_type,
                    token=token,
                    on_bytes=on_bytes,
                )
            except TransferError:
                raise
            except Exception as exc:
                # e.g. a progress listener raising while the body streams
                raise TransferError(
                    message=str(exc) or GENERIC_FAILURE_MESSAGE,
                    context={"file_name": candidate.file_name},
                    cause=exc,
                ) from exc
            reference = build_reference(payload, candidate, self._config.asset_origin)
        except TransferError as exc:
            session.transition(UploadStatus.FAILED)
            elapsed_ms = (time.monotonic() - t0) * 1000
            self._metrics.increment(
                "mediaintake.upload_failure_total",
                tags={"code": getattr(exc.code, "value", exc.code)},
            )
            self._metrics.timing(
                "mediaintake.upload_duration_ms", elapsed_ms, tags={"status": "failed"},
            )
            log.warning(
                "Upload failed",
                extra={
                    "extra_fields": {
                        "op": "upload",
                        "session_id": session.session_id,
                        "file_name": candidate.file_name,
                        "error_code": exc.code,
                        "error": exc.message,
                    }
                },
            )
            return TransferFailed(error=exc, session=session)

        session.transition(UploadStatus.SUCCEEDED)
        elapsed_ms = (time.monotonic() - t0) * 1000
        self._metrics.increment("mediaintake.upload_success_total")
        self._metrics.increment("mediaintake.bytes_uploaded_total", value=len(data))
        self._metrics.timing(
            "mediaintake.upload_duration_ms", elapsed_ms, tags={"status": "succeeded"},
        )
        log.info(
            "Upload succeeded",
            extra={
                "extra_fields": {
                    "op": "upload",
                    "session_id": session.session_id,
                    "canonical_url": reference.canonical_url,
                    "size_bytes": reference.size_bytes,
                    "duration_ms": round(elapsed_ms, 1),
                }
            },
        )
        return TransferSucceeded(reference=reference, session=session)

    async def close(self) -> None:
        """Release the HTTP client held by the endpoint wrapper."""
        await self._api.close()
