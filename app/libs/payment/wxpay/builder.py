"""统一下单请求参数"""

from typing import TYPE_CHECKING

from ..base import Order
from .constants import TradeType

if TYPE_CHECKING:
    from .config import WXPayConfig


def build_unified_order_data(
    config: "WXPayConfig",
    order: Order,
    trade_type: TradeType | str,
    client_ip: str,
) -> dict[str, str]:
    """
    生成统一下单接口的业务参数

    Args:
        config: 客户端配置，提供回调地址
        order: 订单
        trade_type: 交易类型，原样透传
        client_ip: 发起支付的终端 IP，由调用方从实际请求中获取

    Returns:
        不含公共参数与签名的业务参数
    """
    if not client_ip:
        raise ValueError("client_ip is required")
    return {
        "body": order.body,
        "out_trade_no": order.id,
        "device_info": "",
        "fee_type": order.fee_type,
        "total_fee": order.price,
        "spbill_create_ip": client_ip,
        "notify_url": config.notify_url,
        "trade_type": str(trade_type),
        "product_id": order.id,
    }
