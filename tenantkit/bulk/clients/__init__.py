"""Remote directory clients."""

from .base import BaseDirectoryClient
from .http import HTTPClient
from .workos import WorkOSClient

__all__ = ["BaseDirectoryClient", "HTTPClient", "WorkOSClient"]
