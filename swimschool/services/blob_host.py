# swimschool/services/blob_host.py
"""
Hospedagem de imagens (comprovante de pagamento e foto de curso).

`upload` devolve a URL permanente ou levanta BlobUploadFailed; quem chama
aborta a operação inteira nesse caso (nenhum registro sem comprovante).
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from swimschool.core.config import settings
from swimschool.core.errors import BlobUploadFailed

logger = logging.getLogger(__name__)

class BlobHost(Protocol):
    def upload(self, data: bytes, filename: str = "image.png") -> str: ...

class ImgbbBlobHost:
    def __init__(
        self,
        api_key: str | None = None,
        upload_url: str | None = None,
        timeout: float | None = None,
        client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.IMGBB_API_KEY
        self.upload_url = upload_url or settings.IMGBB_UPLOAD_URL
        self.timeout = timeout or settings.BLOB_UPLOAD_TIMEOUT_SECONDS
        self._client = client

    def _post(self, data: bytes, filename: str) -> httpx.Response:
        files = {"image": (filename, data)}
        params = {"key": self.api_key}
        if self._client is not None:
            return self._client.post(self.upload_url, params=params, files=files)
        with httpx.Client(timeout=self.timeout) as c:
            return c.post(self.upload_url, params=params, files=files)

    def upload(self, data: bytes, filename: str = "image.png") -> str:
        if not data:
            raise BlobUploadFailed("Empty image.", {"filename": filename})
        try:
            r = self._post(data, filename)
            body = r.json()
            if not isinstance(body, dict):
                raise ValueError("unexpected response body")
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("Image upload to %s failed", self.upload_url)
            raise BlobUploadFailed("Image upload failed. Please try again.", {"reason": str(e)}) from e

        if r.status_code >= 400 or not body.get("success"):
            err = body.get("error")
            reason = (err.get("message") if isinstance(err, dict) else err) or f"HTTP {r.status_code}"
            logger.error("Image host rejected upload of %s: %s", filename, reason)
            raise BlobUploadFailed("Image upload failed. Please try again.", {"reason": reason})

        url = (body.get("data") or {}).get("url")
        if not url:
            raise BlobUploadFailed("Image host returned no URL.", {"filename": filename})
        return url
