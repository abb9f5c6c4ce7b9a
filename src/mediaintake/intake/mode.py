"""Input mode controller.

Selects which pipeline receives user input: the local-upload pipeline
(validator + transfer manager) or the external-URL pipeline (syntax
check + normalizer).  Also holds the transient, user-visible state that
belongs to the input surface: the pending error and the URL draft.
"""

from __future__ import annotations

from mediaintake.errors import MediaIntakeError
from mediaintake.models import InputMode


class InputModeController:
    """Two-state toggle between :attr:`InputMode.LOCAL_UPLOAD` (initial)
    and :attr:`InputMode.EXTERNAL_URL`.

    Every explicit switch -- including re-selecting the current mode --
    clears the pending error and the URL draft.  Nothing else changes
    the mode; a successful or failed submission leaves it as is.

    Parameters
    ----------
    allow_external_url:
        When ``False`` the controller is pinned to local uploads.
    """

    def __init__(self, allow_external_url: bool = True) -> None:
        self.allow_external_url: bool = allow_external_url
        self.mode: InputMode = InputMode.LOCAL_UPLOAD
        self.error: MediaIntakeError | None = None
        self.url_draft: str = ""

    @property
    def accepts_files(self) -> bool:
        return self.mode == InputMode.LOCAL_UPLOAD

    @property
    def accepts_urls(self) -> bool:
        return self.mode == InputMode.EXTERNAL_URL

    def switch_to(self, mode: InputMode) -> None:
        """Select *mode* and reset the transient input state.

        Raises
        ------
        ValueError
            If *mode* is ``EXTERNAL_URL`` and external URLs are disabled.
        """
        mode = InputMode(mode)
        if mode == InputMode.EXTERNAL_URL and not self.allow_external_url:
            raise ValueError("External URL input is disabled for this widget")
        self.mode = mode
        self.error = None
        self.url_draft = ""

    def toggle(self) -> InputMode:
        """Switch to the other mode and return it."""
        if self.mode == InputMode.LOCAL_UPLOAD:
            self.switch_to(InputMode.EXTERNAL_URL)
        else:
            self.switch_to(InputMode.LOCAL_UPLOAD)
        return self.mode

    def set_error(self, error: MediaIntakeError) -> None:
        self.error = error

    def dismiss_error(self) -> None:
        self.error = None

    def set_draft(self, text: str) -> None:
        self.url_draft = text

    def clear_draft(self) -> None:
        self.url_draft = ""
