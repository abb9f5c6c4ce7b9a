"""Upload session state machine.

Tracks one transfer invocation from creation to its terminal status and
enforces valid transitions and monotonic progress.
"""

from __future__ import annotations

import uuid

from mediaintake.models import UploadStatus


class UploadSession:
    """Finite state machine for a single upload.

    Valid transitions::

        IDLE         -> IN_PROGRESS
        IN_PROGRESS  -> SUCCEEDED | FAILED
        SUCCEEDED    -> (terminal)
        FAILED       -> (terminal)

    Parameters
    ----------
    file_name:
        Name of the file being transferred, for diagnostics.
    session_id:
        Identifier of the session.  A random one is generated when omitted.
    """

    VALID_TRANSITIONS: dict[UploadStatus, set[UploadStatus]] = {
        UploadStatus.IDLE: {UploadStatus.IN_PROGRESS},
        UploadStatus.IN_PROGRESS: {UploadStatus.SUCCEEDED, UploadStatus.FAILED},
        UploadStatus.SUCCEEDED: set(),
        UploadStatus.FAILED: set(),
    }

    def __init__(self, file_name: str = "", session_id: str | None = None) -> None:
        self.session_id: str = session_id or uuid.uuid4().hex
        self.file_name: str = file_name
        self.status: UploadStatus = UploadStatus.IDLE
        self.progress_percent: int = 0

    @property
    def is_terminal(self) -> bool:
        return not self.VALID_TRANSITIONS[self.status]

    def transition(self, new_status: UploadStatus) -> None:
        """Attempt to transition to *new_status*.

        Raises
        ------
        ValueError
            If the transition from the current status is not valid.
        """
        allowed = self.VALID_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise ValueError(
                f"Invalid state transition: {self.status.value} -> {new_status.value} "
                f"for upload {self.session_id}. "
                f"Allowed transitions from {self.status.value}: "
                f"{{{', '.join(s.value for s in allowed)}}}"
            )
        self.status = new_status

    def advance(self, percent: int) -> bool:
        """Record progress, clamped to ``[0, 100]``.

        Returns ``True`` when the recorded percentage increased.  Values
        lower than the current one are ignored so progress never goes
        backwards.

        Raises
        ------
        ValueError
            If the session is not ``IN_PROGRESS``.
        """
        if self.status != UploadStatus.IN_PROGRESS:
            raise ValueError(
                f"Cannot record progress for upload {self.session_id} "
                f"in state {self.status.value}"
            )
        percent = max(0, min(100, int(percent)))
        if percent <= self.progress_percent:
            return False
        self.progress_percent = percent
        return True

    def __repr__(self) -> str:
        return (
            f"UploadSession(session_id={self.session_id!r}, status={self.status.value!r}, "
            f"progress_percent={self.progress_percent})"
        )


def compute_percent(loaded: int, total: int | None) -> int:
    """Percentage of *total* covered by *loaded*, rounded and clamped.

    Returns ``0`` when the total is unknown or zero.
    """
    if not total or total <= 0:
        return 0
    return max(0, min(100, round(loaded * 100 / total)))
