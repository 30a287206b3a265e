import httpx
import pytest

from swimschool.core.errors import BlobUploadFailed
from swimschool.services.blob_host import ImgbbBlobHost

UPLOAD_URL = "https://imgbb.test/1/upload"

def _host(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ImgbbBlobHost(api_key="k123", upload_url=UPLOAD_URL, client=client)

def test_successful_upload_returns_permanent_url():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["key"] = request.url.params.get("key")
        seen["body"] = request.content
        return httpx.Response(200, json={"success": True, "data": {"url": "https://i.ibb.co/abc/slip.png"}})

    url = _host(handler).upload(b"\x89PNG-bytes", "slip.png")

    assert url == "https://i.ibb.co/abc/slip.png"
    assert seen["key"] == "k123"
    assert b'name="image"' in seen["body"]

def test_host_rejection_raises():
    def handler(request):
        return httpx.Response(400, json={"success": False, "error": {"message": "Invalid API key"}})

    with pytest.raises(BlobUploadFailed) as exc_info:
        _host(handler).upload(b"data", "slip.png")
    assert exc_info.value.details["reason"] == "Invalid API key"
    assert exc_info.value.status_code == 502

def test_network_error_raises():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(BlobUploadFailed):
        _host(handler).upload(b"data", "slip.png")

def test_empty_image_is_rejected_without_calling_host():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"success": True, "data": {"url": "x"}})

    with pytest.raises(BlobUploadFailed):
        _host(handler).upload(b"", "slip.png")
    assert calls == []
