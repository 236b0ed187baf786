"""微信支付 v2 接口常量"""

from enum import StrEnum

DOMAIN_API = "api.mch.weixin.qq.com"

SUCCESS = "SUCCESS"
FAIL = "FAIL"

FIELD_SIGN = "sign"
FIELD_SIGN_TYPE = "sign_type"

UNIFIEDORDER_URL_SUFFIX = "/pay/unifiedorder"
SANDBOX_UNIFIEDORDER_URL_SUFFIX = "/sandboxnew/pay/unifiedorder"
SANDBOX_SIGNKEY_URL_SUFFIX = "/sandboxnew/pay/getsignkey"

# 获取沙箱密钥使用固定超时，与业务请求的超时配置无关
SANDBOX_SIGNKEY_CONNECT_TIMEOUT_MS = 8000
SANDBOX_SIGNKEY_READ_TIMEOUT_MS = 10000

USER_AGENT = "wxpay-gateway/1.0 (httpx)"


class SignType(StrEnum):
    MD5 = "MD5"
    HMACSHA256 = "HMAC-SHA256"


class TradeType(StrEnum):
    """交易类型"""

    # 扫码支付
    NATIVE = "NATIVE"
    # JSAPI 支付（或小程序支付）
    JSAPI = "JSAPI"
    # APP 支付
    APP = "APP"
    # H5 支付
    MWEB = "MWEB"
