"""Pytest 配置文件"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app_factory import create_app
from libs.http_client import HttpClient, Request, Response
from libs.payment import Order, WechatPayProvider, get_wechat_pay_service
from libs.payment import factory as payment_factory
from libs.payment.wxpay import SignType, WXPayClient, WXPayConfig
from libs.payment.wxpay.utils import dict_to_xml, generate_signature

TEST_APP_ID = "wx2421b1c4370ec43b"
TEST_MCH_ID = "10000100"
TEST_KEY = "192006250b4c09247ec02edce69f6a2d"
TEST_NOTIFY_URL = "https://merchant.example.com/api/payment/wechat/notify"


def make_http_response(body: str, status_code: int = 200) -> Response:
    """构造 HttpClient 返回的响应"""
    req = Request(method="POST", url="https://api.mch.weixin.qq.com/pay/unifiedorder")
    return Response(
        status_code=status_code,
        headers={"content-type": "text/xml"},
        body=body.encode("utf-8"),
        latency_ms=1,
        request=req,
    )


def signed_xml(
    data: dict[str, str], sign_type: SignType = SignType.MD5, key: str = TEST_KEY
) -> str:
    """生成带签名的 XML"""
    payload = dict(data)
    payload["sign"] = generate_signature(payload, key, sign_type)
    return dict_to_xml(payload)


@pytest.fixture
def wxpay_config() -> WXPayConfig:
    return WXPayConfig(
        app_id=TEST_APP_ID,
        mch_id=TEST_MCH_ID,
        key=TEST_KEY,
        notify_url=TEST_NOTIFY_URL,
    )


@pytest.fixture
def order() -> Order:
    return Order(id="O1", body="Widget", fee_type="CNY", price="100")


@pytest.fixture
def mock_http_client() -> MagicMock:
    client = MagicMock(spec=HttpClient)
    client.post = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def wxpay_client(wxpay_config, mock_http_client) -> WXPayClient:
    return WXPayClient(wxpay_config, http_client=mock_http_client)


@pytest.fixture
def provider(wxpay_config, wxpay_client) -> WechatPayProvider:
    return WechatPayProvider(wxpay_config, client=wxpay_client)


@pytest.fixture
def app(provider, monkeypatch):
    """创建应用实例，支付服务替换为测试实例"""
    monkeypatch.setattr(payment_factory, "_wechat_pay_service", provider)
    application = create_app()
    application.dependency_overrides[get_wechat_pay_service] = lambda: provider
    return application


@pytest.fixture
def client(app):
    """创建测试客户端"""
    return TestClient(app)
