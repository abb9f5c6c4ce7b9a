"""Credential / payload redaction for safe logging.

Applied to every request/response summary before it is written to a
debug dump:

* **Authorization headers** and any key that looks like a secret are
  masked, keeping at most the last four characters of the credential.
* **File bytes** are replaced with ``<binary:N_bytes>``.
* The full bearer **token is never present** in the output.
"""

from __future__ import annotations

import copy
import re
from typing import Any

# If any of these appear in a key name (case-insensitive) the value is masked.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "api_key",
    "api-key",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _mask_token(value: str, token: str | None) -> str:
    """Replace bearer / token strings with a safe placeholder."""
    if token and token in value:
        suffix = token[-4:] if len(token) >= 8 else "****"
        value = value.replace(token, f"<redacted:...{suffix}>")
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, (list, tuple)):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return f"<binary:{len(value)}_bytes>"
    if isinstance(value, str) and token:
        return _mask_token(value, token)
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            if isinstance(value, str):
                masked = _mask_token(value, token)
                result[key] = masked if masked != value else "<redacted>"
            else:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with sensitive data redacted.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (request headers, a response body, ...).
    token:
        The bearer credential used for the request.  Any occurrence of
        this exact string anywhere in the payload is replaced.

    Examples
    --------
    >>> redact({"Authorization": "Bearer abc123"})
    {'Authorization': 'Bearer <redacted>'}
    """
    safe = copy.deepcopy(payload)
    return _redact_dict(safe, token)
