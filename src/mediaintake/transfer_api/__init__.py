"""HTTP layer for the upload endpoint.

Exports
-------
UploadTransport
    Multipart ``POST`` with streamed-body progress and typed errors.
UploadAPI
    Endpoint wrapper that unwraps the success envelope.
"""

from .transport import UploadTransport
from .uploads import UploadAPI

__all__ = [
    "UploadAPI",
    "UploadTransport",
]
