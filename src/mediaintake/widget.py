"""The media ingestion widget.

:class:`MediaIntake` is the single, configurable implementation behind
both the basic upload widget and the extended one with URL input and
authenticated uploads.  Capability flags on :class:`IntakeConfig`
(``allow_external_url``, ``multiple``) and the injected credential
provider select the behaviour.

Control flow::

    drop / select  -> validate -> TransferManager.upload -> registry.add
    submit_url     -> accept_url (check + normalize)     -> registry.add

Any rejection or transfer failure is surfaced through :attr:`error` and
leaves the registry untouched.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable, Iterable

from mediaintake.config import IntakeConfig
from mediaintake.errors import IntakeValidationError, MediaIntakeError
from mediaintake.intake.mode import InputModeController
from mediaintake.intake.normalize import accept_url
from mediaintake.intake.registry import AttachedCallback, ReferenceRegistry, RemovedCallback
from mediaintake.intake.transfer import TransferManager
from mediaintake.intake.validate import validate_candidate
from mediaintake.models import (
    AcceptPolicy,
    ExternalUrlReference,
    FileCandidate,
    IngestResult,
    InputMode,
    MediaReference,
    TransferSucceeded,
)
from mediaintake.observability import NoopMetricsHook, get_logger
from mediaintake.transfer_api import UploadAPI

log = get_logger("mediaintake.widget")

FileProgressCallback = Callable[[FileCandidate, int], None]


class MediaIntake:
    """Attach local files or external URLs to a parent record.

    Parameters
    ----------
    on_media_attached:
        Called as ``on_media_attached(canonical_url, reference)`` once per
        successful ingestion.
    config:
        Endpoint and capability settings.  Defaults to ``IntakeConfig()``.
    policy:
        Acceptance policy.  Defaults to ``config.policy()``.
    credentials:
        Credential provider or fixed token for authenticated uploads.
    upload_api:
        Endpoint wrapper override (tests, custom transports).
    on_media_removed:
        Opt-in removal notification, see
        :class:`~mediaintake.intake.registry.ReferenceRegistry`.
    """

    def __init__(
        self,
        on_media_attached: AttachedCallback,
        *,
        config: IntakeConfig | None = None,
        policy: AcceptPolicy | None = None,
        credentials: Callable[[], str | None] | str | None = None,
        upload_api: UploadAPI | None = None,
        on_media_removed: RemovedCallback | None = None,
    ) -> None:
        self.config = config or IntakeConfig()
        self.policy = policy or self.config.policy()
        self._metrics = (
            self.config.metrics if self.config.metrics is not None else NoopMetricsHook()
        )
        self._mode = InputModeController(allow_external_url=self.config.allow_external_url)
        self._registry = ReferenceRegistry(on_media_attached, on_media_removed)
        self._transfer = TransferManager(
            self.config, upload_api=upload_api, credentials=credentials,
        )

    # -- state for the rendering surface ----------------------------------

    @property
    def mode(self) -> InputMode:
        return self._mode.mode

    @property
    def error(self) -> MediaIntakeError | None:
        """The error currently shown to the user, if any."""
        return self._mode.error

    @property
    def url_draft(self) -> str:
        return self._mode.url_draft

    @property
    def references(self) -> tuple[MediaReference, ...]:
        return self._registry.entries

    @property
    def uploading(self) -> bool:
        return bool(self._transfer.active_sessions)

    @property
    def progress(self) -> dict[str, int]:
        """Progress of every in-flight upload, keyed by session id."""
        return {
            sid: session.progress_percent
            for sid, session in self._transfer.active_sessions.items()
        }

    # -- mode -------------------------------------------------------------

    def toggle_mode(self) -> InputMode:
        return self._mode.toggle()

    def switch_mode(self, mode: InputMode) -> None:
        self._mode.switch_to(mode)

    def dismiss_error(self) -> None:
        self._mode.dismiss_error()

    # -- local files ------------------------------------------------------

    async def submit_files(
        self,
        candidates: Iterable[FileCandidate],
        on_progress: FileProgressCallback | None = None,
    ) -> list[IngestResult]:
        """Validate and upload the given files.

        Without the ``multiple`` capability only the first file is used.
        With it, every file is handled concurrently and independently.

        Raises
        ------
        ValueError
            If the widget is in external-URL mode.
        """
        if not self._mode.accepts_files:
            raise ValueError("Files can only be submitted in local upload mode")
        candidates = list(candidates)
        if not candidates:
            return []
        if not self.config.multiple:
            candidates = candidates[:1]

        self._mode.dismiss_error()
        results = await asyncio.gather(
            *(self._ingest_file(c, on_progress) for c in candidates)
        )
        return list(results)

    async def drop(
        self,
        candidates: Iterable[FileCandidate],
        on_progress: FileProgressCallback | None = None,
    ) -> list[IngestResult]:
        """Files dropped on the drag-and-drop target."""
        return await self.submit_files(candidates, on_progress)

    async def select(
        self,
        candidates: Iterable[FileCandidate],
        on_progress: FileProgressCallback | None = None,
    ) -> list[IngestResult]:
        """Files chosen with the file picker."""
        return await self.submit_files(candidates, on_progress)

    async def _ingest_file(
        self,
        candidate: FileCandidate,
        on_progress: FileProgressCallback | None,
    ) -> IngestResult:
        try:
            validate_candidate(candidate, self.policy)
        except IntakeValidationError as exc:
            self._surface(exc, candidate.file_name)
            return IngestResult(source=candidate.file_name, error=exc)

        listener = None
        if on_progress is not None:
            listener = functools.partial(on_progress, candidate)

        outcome = await self._transfer.upload(candidate, on_progress=listener)
        if isinstance(outcome, TransferSucceeded):
            self._registry.add(outcome.reference)
            return IngestResult(source=candidate.file_name, reference=outcome.reference)

        self._surface(outcome.error, candidate.file_name)
        return IngestResult(source=candidate.file_name, error=outcome.error)

    # -- external URLs ----------------------------------------------------

    def set_url_draft(self, text: str) -> None:
        self._mode.set_draft(text)

    def submit_url(self, text: str | None = None) -> IngestResult:
        """Accept an external URL (the draft when *text* is ``None``).

        On success the normalized reference is registered and the draft
        and error are cleared; the mode stays ``EXTERNAL_URL``.

        Raises
        ------
        ValueError
            If the widget is not in external-URL mode.
        """
        if not self._mode.accepts_urls:
            raise ValueError("URLs can only be submitted in external URL mode")
        raw = self._mode.url_draft if text is None else text

        try:
            canonical = accept_url(raw)
        except IntakeValidationError as exc:
            self._surface(exc, raw)
            return IngestResult(source=raw, error=exc)

        reference = ExternalUrlReference(
            canonical_url=canonical,
            original_name=self.config.external_label,
        )
        self._registry.add(reference)
        self._mode.clear_draft()
        self._mode.dismiss_error()
        return IngestResult(source=raw, reference=reference)

    # -- registry ---------------------------------------------------------

    def remove(self, index: int) -> MediaReference:
        return self._registry.remove(index)

    # -- internals --------------------------------------------------------

    def _surface(self, error: MediaIntakeError, source: str) -> None:
        self._mode.set_error(error)
        self._metrics.increment(
            "mediaintake.rejected_total",
            tags={"code": getattr(error.code, "value", error.code)},
        )
        log.info(
            "Submission rejected",
            extra={
                "extra_fields": {
                    "op": "surface_error",
                    "source": source[:200],
                    "error_code": error.code,
                    "error": error.message,
                }
            },
        )

    async def close(self) -> None:
        await self._transfer.close()

    async def __aenter__(self) -> MediaIntake:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
