import pytest

from libs.payment import MinappPayParams, NotifyResult, PaymentResult


class TestPaymentResult:
    def test_ok(self):
        result = PaymentResult.ok("weixin://wxpay/bizpayurl?pr=abc")
        assert result.success is True
        assert result.data == "weixin://wxpay/bizpayurl?pr=abc"
        assert result.error_code is None
        assert result.error_msg is None

    def test_fail(self):
        result = PaymentResult.fail("余额不足", error_code="NOTENOUGH")
        assert result.success is False
        assert result.data is None
        assert result.error_code == "NOTENOUGH"

    def test_fail_empty_code_normalized(self):
        assert PaymentResult.fail("boom", error_code="").error_code is None

    def test_success_requires_data(self):
        with pytest.raises(ValueError):
            PaymentResult.ok("")

    def test_failure_requires_message(self):
        with pytest.raises(ValueError):
            PaymentResult.fail("")

    def test_success_with_error_rejected(self):
        with pytest.raises(ValueError):
            PaymentResult(success=True, data="url", error_msg="boom")

    def test_failure_with_data_rejected(self):
        with pytest.raises(ValueError):
            PaymentResult(success=False, data="url", error_msg="boom")


class TestNotifyResult:
    def test_ok(self):
        result = NotifyResult.ok("O123", "<xml/>")
        assert result.success is True
        assert result.error_msg is None

    def test_fail(self):
        result = NotifyResult.fail("signature invalid")
        assert result.out_trade_no is None
        assert result.return_body is None

    def test_failure_with_order_rejected(self):
        with pytest.raises(ValueError):
            NotifyResult(success=False, out_trade_no="O123", error_msg="boom")

    def test_success_with_error_rejected(self):
        with pytest.raises(ValueError):
            NotifyResult(success=True, out_trade_no="O123", return_body="<xml/>", error_msg="x")


def test_minapp_params_package():
    params = MinappPayParams(
        time_stamp="1700000000",
        nonce_str="abc",
        prepay_id="wx123",
        sign_type="MD5",
        pay_sign="SIGN",
    )
    assert params.package == "prepay_id=wx123"
