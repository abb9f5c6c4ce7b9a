"""Credential providers for the transfer manager.

The owning context hands the widget a *provider* -- any zero-argument
callable returning a bearer token or ``None`` -- instead of the transfer
code reaching into process-wide storage.  The provider is called once
per transfer attempt; ``None`` or an empty string means "send no
``Authorization`` header" and the server decides.

Two ready-made providers are offered:

* :class:`StaticCredentialProvider` -- a fixed token.
* :class:`SessionStoreCredentialProvider` -- reads a serialized session
  object (``{"state": {"token": "..."}}``) from a durable key-value
  store such as a settings file mapping or a keyring-backed dict.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Protocol, runtime_checkable

from mediaintake.observability import get_logger

log = get_logger("mediaintake.credentials")

DEFAULT_SESSION_KEY = "auth-storage"


@runtime_checkable
class CredentialProvider(Protocol):
    """Anything that can be called to obtain the current bearer token."""

    def __call__(self) -> str | None:
        ...


class StaticCredentialProvider:
    """Always returns the same token (or ``None``)."""

    __slots__ = ("_token",)

    def __init__(self, token: str | None) -> None:
        self._token = token or None

    def __call__(self) -> str | None:
        return self._token

    def __repr__(self) -> str:
        state = "set" if self._token else "empty"
        return f"StaticCredentialProvider(token=<{state}>)"


class SessionStoreCredentialProvider:
    """Read the token field of a serialized session from a key-value store.

    Parameters
    ----------
    store:
        Mapping holding serialized session blobs.  Read on every call so
        a login or logout elsewhere is picked up by the next transfer.
    key:
        Key of the session blob.
    token_field:
        Field inside the blob's ``state`` object that holds the token.
    """

    def __init__(
        self,
        store: Mapping[str, str],
        key: str = DEFAULT_SESSION_KEY,
        token_field: str = "token",
    ) -> None:
        self._store = store
        self._key = key
        self._token_field = token_field

    def __call__(self) -> str | None:
        raw = self._store.get(self._key)
        if not raw:
            return None
        try:
            session = json.loads(raw)
        except (TypeError, ValueError) as exc:
            log.warning(
                "Unreadable session blob; continuing without credential",
                extra={"extra_fields": {"op": "read_credential", "key": self._key, "error": str(exc)}},
            )
            return None
        if not isinstance(session, dict):
            return None
        state = session.get("state")
        if not isinstance(state, dict):
            return None
        token = state.get(self._token_field)
        if isinstance(token, str) and token:
            return token
        return None


def resolve_provider(
    credentials: Callable[[], str | None] | str | None,
) -> Callable[[], str | None]:
    """Coerce the ``credentials`` argument accepted by the widget into a
    provider callable.  A plain string is wrapped in a
    :class:`StaticCredentialProvider`."""
    if credentials is None or isinstance(credentials, str):
        return StaticCredentialProvider(credentials)
    if not callable(credentials):
        raise TypeError(
            f"credentials must be a callable or a token string, got {type(credentials).__name__}"
        )
    return credentials
