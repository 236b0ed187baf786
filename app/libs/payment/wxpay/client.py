"""微信支付 v2 接口客户端"""

import logging
from typing import TYPE_CHECKING

from libs.http_client import HttpClient, logging_middleware, raise_for_status_middleware

from .constants import (
    FAIL,
    FIELD_SIGN_TYPE,
    SANDBOX_SIGNKEY_CONNECT_TIMEOUT_MS,
    SANDBOX_SIGNKEY_READ_TIMEOUT_MS,
    SANDBOX_SIGNKEY_URL_SUFFIX,
    SANDBOX_UNIFIEDORDER_URL_SUFFIX,
    SUCCESS,
    UNIFIEDORDER_URL_SUFFIX,
    USER_AGENT,
    SignType,
)
from .exceptions import SandboxKeyError, WXPayError
from .utils import (
    dict_to_xml,
    generate_nonce_str,
    generate_signature,
    is_signature_valid,
    xml_to_dict,
)

if TYPE_CHECKING:
    from .config import WXPayConfig

logger = logging.getLogger(__name__)


class WXPayClient:
    """
    微信支付 v2 (XML) 接口客户端

    负责补全公共参数、签名、发送请求以及校验响应签名。不做重试。
    """

    def __init__(self, config: "WXPayConfig", http_client: HttpClient | None = None):
        self.config = config
        # 沙箱环境仅支持 MD5
        self.sign_type = SignType.MD5 if config.use_sandbox else SignType.HMACSHA256
        self._http_client = http_client or HttpClient(
            middlewares=[logging_middleware(logger), raise_for_status_middleware()],
            connect_timeout=config.http_connect_timeout_ms / 1000,
            read_timeout=config.http_read_timeout_ms / 1000,
            default_headers={"Content-Type": "text/xml", "User-Agent": USER_AGENT},
            cert=config.cert_path,
        )

    async def close(self) -> None:
        await self._http_client.close()

    def fill_request_data(self, data: dict[str, str]) -> dict[str, str]:
        """补全 appid、mch_id、nonce_str、sign_type 并签名"""
        filled = dict(data)
        filled["appid"] = self.config.app_id
        filled["mch_id"] = self.config.mch_id
        filled["nonce_str"] = generate_nonce_str()
        filled[FIELD_SIGN_TYPE] = self.sign_type.value
        filled["sign"] = generate_signature(filled, self.config.key, self.sign_type)
        return filled

    def is_response_signature_valid(self, data: dict[str, str]) -> bool:
        return is_signature_valid(data, self.config.key, self.sign_type)

    def is_pay_result_notify_signature_valid(self, data: dict[str, str]) -> bool:
        """
        校验支付结果通知的签名

        通知中的 sign_type 缺省为 MD5；无法识别的签名方式视为无效。
        """
        sign_type_in_data = data.get(FIELD_SIGN_TYPE, "").strip()
        if not sign_type_in_data or sign_type_in_data == SignType.MD5:
            sign_type = SignType.MD5
        elif sign_type_in_data == SignType.HMACSHA256:
            sign_type = SignType.HMACSHA256
        else:
            logger.warning(f"支付结果通知包含未知签名方式: {sign_type_in_data}")
            return False
        return is_signature_valid(data, self.config.key, sign_type)

    def process_response_xml(self, xml: str) -> dict[str, str]:
        """解析响应 XML，return_code 为 SUCCESS 时校验签名"""
        resp = xml_to_dict(xml)
        return_code = resp.get("return_code")
        if return_code is None:
            raise WXPayError(f"No `return_code` in XML: {xml}")
        if return_code == FAIL:
            return resp
        if return_code == SUCCESS:
            if self.is_response_signature_valid(resp):
                return resp
            raise WXPayError(f"Invalid sign value in XML: {xml}")
        raise WXPayError(f"return_code value {return_code} is invalid in XML: {xml}")

    async def request_without_cert(
        self,
        url_suffix: str,
        data: dict[str, str],
        connect_timeout_ms: int,
        read_timeout_ms: int,
    ) -> str:
        url = f"{self.config.api_base_url}{url_suffix}"
        response = await self._http_client.post(
            url,
            body=dict_to_xml(data),
            connect_timeout=connect_timeout_ms / 1000,
            read_timeout=read_timeout_ms / 1000,
        )
        return response.text()

    async def unified_order(self, data: dict[str, str]) -> dict[str, str]:
        """
        统一下单

        Args:
            data: 业务参数

        Returns:
            响应数据；return_code 为 FAIL 时原样返回

        Raises:
            WXPayError: 响应格式错误或签名无效
            httpx.HTTPError: 网络错误
        """
        url_suffix = (
            SANDBOX_UNIFIEDORDER_URL_SUFFIX if self.config.use_sandbox else UNIFIEDORDER_URL_SUFFIX
        )
        req = dict(data)
        if self.config.notify_url and "notify_url" not in req:
            req["notify_url"] = self.config.notify_url

        resp_xml = await self.request_without_cert(
            url_suffix,
            self.fill_request_data(req),
            self.config.http_connect_timeout_ms,
            self.config.http_read_timeout_ms,
        )
        return self.process_response_xml(resp_xml)

    async def get_sandbox_sign_key(self) -> str:
        """使用商户密钥（MD5）请求沙箱签名密钥"""
        params = {
            "mch_id": self.config.mch_id,
            "nonce_str": generate_nonce_str(),
        }
        params["sign"] = generate_signature(params, self.config.key, SignType.MD5)
        try:
            resp_xml = await self.request_without_cert(
                SANDBOX_SIGNKEY_URL_SUFFIX,
                params,
                SANDBOX_SIGNKEY_CONNECT_TIMEOUT_MS,
                SANDBOX_SIGNKEY_READ_TIMEOUT_MS,
            )
            result = xml_to_dict(resp_xml)
        except Exception as e:
            logger.exception(f"获取微信支付沙箱密钥异常: {e}")
            raise SandboxKeyError(f"failed to fetch sandbox sign key: {e}") from e

        sandbox_key = result.get("sandbox_signkey", "")
        if result.get("return_code") != SUCCESS or not sandbox_key:
            logger.error(f"获取微信支付沙箱密钥失败: {result}")
            raise SandboxKeyError(
                f"failed to fetch sandbox sign key: {result.get('return_msg', 'unknown error')}"
            )
        return sandbox_key
