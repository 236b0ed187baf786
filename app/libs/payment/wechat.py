"""微信支付服务"""

import logging

from .base import MinappPayParams, NotifyResult, Order, PaymentProvider, PaymentResult
from .wxpay import WXPayClient, WXPayConfig, WXPayError, build_unified_order_data
from .wxpay.constants import FAIL, SUCCESS, SignType, TradeType
from .wxpay.utils import current_timestamp, dict_to_xml, generate_signature, xml_to_dict

logger = logging.getLogger(__name__)

MINAPP_PAY_FAILED = "minapp payment request failed"


class WechatPayProvider(PaymentProvider):
    """微信支付服务 (v2 / XML 接口)"""

    def __init__(self, config: WXPayConfig, client: WXPayClient | None = None):
        self.config = config
        self.client = client or WXPayClient(config)

    async def close(self) -> None:
        await self.client.close()

    async def _unified_order(
        self,
        order: Order,
        trade_type: TradeType,
        client_ip: str,
        **extra: str,
    ) -> dict[str, str]:
        data = build_unified_order_data(self.config, order, trade_type, client_ip)
        data.update(extra)
        return await self.client.unified_order(data)

    @staticmethod
    def _check_response(resp: dict[str, str]) -> PaymentResult | None:
        """检查通信标识与业务结果，失败时返回对应的 PaymentResult"""
        return_code = resp.get("return_code", "").upper()
        if return_code != SUCCESS:
            return PaymentResult.fail(
                resp.get("return_msg") or f"return_code: {return_code or 'missing'}"
            )

        result_code = resp.get("result_code", "").upper()
        if result_code != SUCCESS:
            err_code = resp.get("err_code", "")
            return PaymentResult.fail(
                resp.get("err_code_des") or err_code or f"result_code: {result_code or 'missing'}",
                error_code=err_code,
            )
        return None

    async def _redirect_pay(
        self,
        order: Order,
        trade_type: TradeType,
        client_ip: str,
        url_field: str,
    ) -> PaymentResult[str]:
        try:
            logger.info(
                f"创建微信支付订单: out_trade_no={order.id}, total_fee={order.price}, "
                f"trade_type={trade_type}, sandbox={self.config.use_sandbox}"
            )
            resp = await self._unified_order(order, trade_type, client_ip)
        except Exception as e:
            logger.exception(f"微信支付创建订单异常: {e}")
            return PaymentResult.fail(str(e) or type(e).__name__)

        failure = self._check_response(resp)
        if failure is not None:
            logger.error(
                f"微信支付创建订单失败: out_trade_no={order.id}, "
                f"error_code={failure.error_code}, error_msg={failure.error_msg}"
            )
            return failure

        url = resp.get(url_field, "")
        if not url:
            logger.error(f"微信支付返回缺少 {url_field}: out_trade_no={order.id}")
            return PaymentResult.fail(f"missing {url_field} in response")
        return PaymentResult.ok(url)

    async def native_pay(self, order: Order, client_ip: str) -> PaymentResult[str]:
        """
        NATIVE 扫码支付，请求统一下单接口

        Returns:
            PaymentResult: 成功时 data 为 code_url
        """
        return await self._redirect_pay(order, TradeType.NATIVE, client_ip, "code_url")

    async def h5_pay(self, order: Order, client_ip: str) -> PaymentResult[str]:
        """
        H5 支付，请求统一下单接口

        Returns:
            PaymentResult: 成功时 data 为 mweb_url
        """
        return await self._redirect_pay(order, TradeType.MWEB, client_ip, "mweb_url")

    def _build_minapp_params(self, prepay_id: str, nonce_str: str) -> MinappPayParams:
        # 再生成小程序支付用的签名
        time_stamp = current_timestamp()
        sign_data = {
            "appId": self.config.app_id,
            "timeStamp": time_stamp,
            "nonceStr": nonce_str,
            "package": f"prepay_id={prepay_id}",
            "signType": SignType.MD5.value,
        }
        return MinappPayParams(
            time_stamp=time_stamp,
            nonce_str=nonce_str,
            prepay_id=prepay_id,
            sign_type=SignType.MD5.value,
            pay_sign=generate_signature(sign_data, self.config.key, SignType.MD5),
        )

    async def minapp_pay(
        self, order: Order, open_id: str, client_ip: str
    ) -> PaymentResult[MinappPayParams]:
        """
        小程序 (JSAPI) 支付，请求统一下单接口并生成调起支付的签名参数

        任何失败都返回统一的失败结果，不返回部分参数。
        """
        try:
            resp = await self._unified_order(order, TradeType.JSAPI, client_ip, openid=open_id)
            failure = self._check_response(resp)
            if failure is not None:
                logger.error(
                    f"小程序支付下单失败: out_trade_no={order.id}, "
                    f"error_code={failure.error_code}, error_msg={failure.error_msg}"
                )
                return PaymentResult.fail(MINAPP_PAY_FAILED)

            prepay_id = resp.get("prepay_id", "")
            nonce_str = resp.get("nonce_str", "")
            if not prepay_id or not nonce_str:
                raise WXPayError("missing prepay_id or nonce_str in response")

            return PaymentResult.ok(self._build_minapp_params(prepay_id, nonce_str))
        except Exception as e:
            logger.exception(f"小程序支付下单异常: out_trade_no={order.id}, {e}")
            return PaymentResult.fail(MINAPP_PAY_FAILED)

    async def handle_notify(self, body: bytes | str) -> NotifyResult:
        """
        微信支付结果通知

        依次验证签名、商户号、appid，通过后返回商户订单号，
        调用方可对订单做进一步验证。
        """
        try:
            data = xml_to_dict(body)
        except Exception as e:
            logger.warning(f"微信支付回调解析失败: {e}")
            return NotifyResult.fail("invalid xml")

        if not self.client.is_pay_result_notify_signature_valid(data):
            logger.warning(f"微信支付回调签名错误: out_trade_no={data.get('out_trade_no')}")
            return NotifyResult.fail("signature invalid")

        if data.get("mch_id", "") != self.config.mch_id:
            logger.warning(f"微信支付回调商户号不匹配: mch_id={data.get('mch_id')}")
            return NotifyResult.fail("merchant id mismatch")

        if data.get("appid", "") != self.config.app_id:
            logger.warning(f"微信支付回调 appid 不匹配: appid={data.get('appid')}")
            return NotifyResult.fail("app id mismatch")

        out_trade_no = data.get("out_trade_no", "")
        if not out_trade_no:
            return NotifyResult.fail("missing out_trade_no")

        logger.info(f"微信支付回调验证通过: out_trade_no={out_trade_no}")
        return NotifyResult.ok(out_trade_no, build_notify_response(True))

    def get_callback_response(self, result: NotifyResult) -> str:
        """生成微信支付回调响应"""
        if result.success and result.return_body:
            return result.return_body
        return build_notify_response(False, result.error_msg)


def build_notify_response(success: bool, msg: str | None = None) -> str:
    """按微信文档生成回调应答 XML"""
    if success:
        return dict_to_xml({"return_code": SUCCESS, "return_msg": "OK"})
    return dict_to_xml({"return_code": FAIL, "return_msg": msg or "FAIL"})
