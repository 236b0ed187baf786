"""支付服务模块"""

from .base import (
    MinappPayParams,
    NotifyResult,
    Order,
    PaymentProvider,
    PaymentResult,
)
from .factory import get_wechat_pay_service, shutdown_wechat_pay_service
from .wechat import WechatPayProvider, build_notify_response

__all__ = [
    "MinappPayParams",
    "NotifyResult",
    "Order",
    "PaymentProvider",
    "PaymentResult",
    "WechatPayProvider",
    "build_notify_response",
    "get_wechat_pay_service",
    "shutdown_wechat_pay_service",
]
