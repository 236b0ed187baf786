"""微信支付 v2 (XML) 客户端"""

from .builder import build_unified_order_data
from .client import WXPayClient
from .config import WXPayConfig, build_config
from .constants import SignType, TradeType
from .exceptions import SandboxKeyError, WXPayError

__all__ = [
    "WXPayClient",
    "WXPayConfig",
    "build_config",
    "build_unified_order_data",
    "SignType",
    "TradeType",
    "SandboxKeyError",
    "WXPayError",
]
