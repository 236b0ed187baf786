import dataclasses

import httpx
import pytest

from conftest import (
    TEST_APP_ID,
    TEST_KEY,
    TEST_MCH_ID,
    TEST_NOTIFY_URL,
    make_http_response,
    signed_xml,
)
from libs.payment.wxpay import SignType, WXPayClient, WXPayError
from libs.payment.wxpay.utils import dict_to_xml, is_signature_valid, xml_to_dict


SUCCESS_RESPONSE = {
    "return_code": "SUCCESS",
    "return_msg": "OK",
    "appid": TEST_APP_ID,
    "mch_id": TEST_MCH_ID,
    "nonce_str": "IITRi8Iabbblz1Jc",
    "result_code": "SUCCESS",
    "prepay_id": "wx201411101639507cbf6ffd8b0779950874",
    "trade_type": "NATIVE",
    "code_url": "weixin://wxpay/bizpayurl?pr=abc123",
}


class TestFillRequestData:
    def test_production_uses_hmac_sha256(self, wxpay_client):
        filled = wxpay_client.fill_request_data({"body": "Widget"})
        assert filled["appid"] == TEST_APP_ID
        assert filled["mch_id"] == TEST_MCH_ID
        assert filled["nonce_str"]
        assert filled["sign_type"] == "HMAC-SHA256"
        assert is_signature_valid(filled, TEST_KEY, SignType.HMACSHA256)

    def test_sandbox_uses_md5(self, wxpay_config, mock_http_client):
        client = WXPayClient(
            dataclasses.replace(wxpay_config, use_sandbox=True),
            http_client=mock_http_client,
        )
        filled = client.fill_request_data({"body": "Widget"})
        assert filled["sign_type"] == "MD5"
        assert is_signature_valid(filled, TEST_KEY, SignType.MD5)

    def test_does_not_mutate_input(self, wxpay_client):
        data = {"body": "Widget"}
        wxpay_client.fill_request_data(data)
        assert data == {"body": "Widget"}


class TestProcessResponseXml:
    def test_success_with_valid_sign(self, wxpay_client):
        resp = wxpay_client.process_response_xml(
            signed_xml(SUCCESS_RESPONSE, SignType.HMACSHA256)
        )
        assert resp["code_url"] == SUCCESS_RESPONSE["code_url"]

    def test_success_with_invalid_sign(self, wxpay_client):
        with pytest.raises(WXPayError, match="Invalid sign"):
            wxpay_client.process_response_xml(signed_xml(SUCCESS_RESPONSE, key="wrong-key"))

    def test_fail_returned_without_sign_check(self, wxpay_client):
        xml = dict_to_xml({"return_code": "FAIL", "return_msg": "appid不存在"})
        resp = wxpay_client.process_response_xml(xml)
        assert resp == {"return_code": "FAIL", "return_msg": "appid不存在"}

    def test_missing_return_code(self, wxpay_client):
        with pytest.raises(WXPayError, match="No `return_code`"):
            wxpay_client.process_response_xml("<xml><return_msg>x</return_msg></xml>")

    def test_unknown_return_code(self, wxpay_client):
        with pytest.raises(WXPayError, match="is invalid"):
            wxpay_client.process_response_xml("<xml><return_code>MAYBE</return_code></xml>")


class TestUnifiedOrder:
    @pytest.mark.asyncio
    async def test_posts_signed_xml(self, wxpay_client, mock_http_client):
        mock_http_client.post.return_value = make_http_response(
            signed_xml(SUCCESS_RESPONSE, SignType.HMACSHA256)
        )

        resp = await wxpay_client.unified_order({"body": "Widget", "trade_type": "NATIVE"})

        assert resp["prepay_id"] == SUCCESS_RESPONSE["prepay_id"]
        call = mock_http_client.post.call_args
        assert call.args[0] == "https://api.mch.weixin.qq.com/pay/unifiedorder"
        assert call.kwargs["connect_timeout"] == 6.0
        assert call.kwargs["read_timeout"] == 8.0
        sent = xml_to_dict(call.kwargs["body"])
        assert sent["notify_url"] == TEST_NOTIFY_URL
        assert sent["body"] == "Widget"
        assert is_signature_valid(sent, TEST_KEY, SignType.HMACSHA256)

    @pytest.mark.asyncio
    async def test_keeps_explicit_notify_url(self, wxpay_client, mock_http_client):
        mock_http_client.post.return_value = make_http_response(
            signed_xml(SUCCESS_RESPONSE, SignType.HMACSHA256)
        )
        await wxpay_client.unified_order({"notify_url": "https://other.example.com/notify"})
        sent = xml_to_dict(mock_http_client.post.call_args.kwargs["body"])
        assert sent["notify_url"] == "https://other.example.com/notify"

    @pytest.mark.asyncio
    async def test_sandbox_url(self, wxpay_config, mock_http_client):
        sandbox_config = dataclasses.replace(wxpay_config, use_sandbox=True)
        client = WXPayClient(sandbox_config, http_client=mock_http_client)
        mock_http_client.post.return_value = make_http_response(signed_xml(SUCCESS_RESPONSE))

        await client.unified_order({"body": "Widget"})

        assert mock_http_client.post.call_args.args[0] == (
            "https://api.mch.weixin.qq.com/sandboxnew/pay/unifiedorder"
        )

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, wxpay_client, mock_http_client):
        mock_http_client.post.side_effect = httpx.ReadTimeout("timed out")
        with pytest.raises(httpx.ReadTimeout):
            await wxpay_client.unified_order({"body": "Widget"})


class TestPayResultNotifySignature:
    NOTIFY = {"appid": TEST_APP_ID, "mch_id": TEST_MCH_ID, "out_trade_no": "O123"}

    def test_default_md5(self, wxpay_client):
        data = xml_to_dict(signed_xml(self.NOTIFY))
        assert wxpay_client.is_pay_result_notify_signature_valid(data) is True

    def test_hmac_sha256_when_declared(self, wxpay_client):
        payload = {**self.NOTIFY, "sign_type": "HMAC-SHA256"}
        data = xml_to_dict(signed_xml(payload, SignType.HMACSHA256))
        assert wxpay_client.is_pay_result_notify_signature_valid(data) is True

    def test_declared_type_mismatch(self, wxpay_client):
        payload = {**self.NOTIFY, "sign_type": "HMAC-SHA256"}
        data = xml_to_dict(signed_xml(payload, SignType.MD5))
        assert wxpay_client.is_pay_result_notify_signature_valid(data) is False

    def test_unknown_sign_type(self, wxpay_client):
        payload = {**self.NOTIFY, "sign_type": "RSA"}
        data = xml_to_dict(signed_xml(payload))
        assert wxpay_client.is_pay_result_notify_signature_valid(data) is False
