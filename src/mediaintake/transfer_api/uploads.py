"""Upload endpoint wrapper.

:class:`UploadAPI` knows the shape of the upload endpoint: which path
and form field to use, and how the success payload is enveloped::

    {"success": true,
     "data": {"filename": "file-1700000000000-123.png",
              "originalName": "photo.png",
              "fileUrl": "/uploads/file-1700000000000-123.png",
              "fileSize": 2097152,
              "mimeType": "image/png"}}

Failure payloads carry ``{"success": false, "error": "<message>"}``.
"""

from __future__ import annotations

from typing import Any

from mediaintake.config import IntakeConfig
from mediaintake.errors import ServerError

from .transport import ProgressCallback, UploadTransport


class UploadAPI:
    """Wrapper for the multipart upload endpoint.

    Parameters
    ----------
    transport:
        A configured :class:`UploadTransport` instance.
    config:
        Supplies the endpoint path and form field name.
    """

    def __init__(self, transport: UploadTransport, config: IntakeConfig) -> None:
        self._transport = transport
        self._config = config

    async def upload_file(
        self,
        file_name: str,
        data: bytes,
        media_type: str,
        token: str | None = None,
        on_bytes: ProgressCallback | None = None,
    ) -> dict[str, Any]:
        """Upload one file and return the stored-file metadata.

        Returns
        -------
        dict
            The ``data`` object of the response (or the whole body when
            the server does not use the envelope).

        Raises
        ------
        ServerError
            If the response body is not a JSON object, or the server
            reports ``"success": false`` with a 2xx status.
        """
        body = await self._transport.post_file(
            self._config.upload_path,
            field=self._config.upload_field,
            file_name=file_name,
            data=data,
            media_type=media_type,
            token=token,
            on_bytes=on_bytes,
        )
        if not isinstance(body, dict):
            raise ServerError(
                message="Upload response was not a JSON object",
                context={"path": self._config.upload_path, "body": body},
            )
        if body.get("success") is False:
            raise ServerError(
                message=str(body.get("error") or "Upload failed"),
                context={"path": self._config.upload_path, "body": body},
            )
        data_obj = body.get("data", body)
        if not isinstance(data_obj, dict):
            raise ServerError(
                message="Upload response did not include file metadata",
                context={"path": self._config.upload_path, "body": body},
            )
        return data_obj

    async def close(self) -> None:
        await self._transport.close()
