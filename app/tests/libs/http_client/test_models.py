import pytest

from libs.http_client.models import Request, Response


class TestRequest:
    def test_create_request(self):
        req = Request(method="POST", url="https://api.mch.weixin.qq.com/pay/unifiedorder")
        assert req.method == "POST"
        assert req.headers == {}
        assert req.body == b""
        assert req.connect_timeout == 6.0
        assert req.read_timeout == 8.0

    def test_request_immutable(self):
        req = Request(method="GET", url="https://example.com")
        with pytest.raises(AttributeError):
            req.method = "POST"


class TestResponse:
    def test_ok_property(self):
        req = Request(method="POST", url="https://example.com")
        resp_200 = Response(status_code=200, headers={}, body=b"", latency_ms=0, request=req)
        resp_404 = Response(status_code=404, headers={}, body=b"", latency_ms=0, request=req)
        resp_500 = Response(status_code=500, headers={}, body=b"", latency_ms=0, request=req)
        assert resp_200.ok is True
        assert resp_404.ok is False
        assert resp_500.ok is False

    def test_text_method(self):
        req = Request(method="POST", url="https://example.com")
        resp = Response(
            status_code=200,
            headers={},
            body="<xml><return_msg>成功</return_msg></xml>".encode("utf-8"),
            latency_ms=0,
            request=req,
        )
        assert resp.text() == "<xml><return_msg>成功</return_msg></xml>"
