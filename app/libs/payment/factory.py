"""支付服务工厂"""

import asyncio
import logging

from configs import app_config
from exceptions.common import PaymentNotConfiguredError

from .wechat import WechatPayProvider
from .wxpay import build_config

logger = logging.getLogger(__name__)

_wechat_pay_service: WechatPayProvider | None = None
_lock = asyncio.Lock()


async def get_wechat_pay_service() -> WechatPayProvider:
    """
    获取微信支付服务（进程内单例）

    首次调用时构建配置；沙箱模式下获取沙箱密钥失败会抛出 SandboxKeyError。

    Raises:
        PaymentNotConfiguredError: 微信支付配置不完整
    """
    global _wechat_pay_service

    if _wechat_pay_service is not None:
        return _wechat_pay_service

    async with _lock:
        if _wechat_pay_service is None:
            if not app_config.wechat_pay_enabled:
                raise PaymentNotConfiguredError()
            config = await build_config(app_config)
            logger.info(
                f"微信支付服务初始化完成: app_id={config.app_id}, mch_id={config.mch_id}, "
                f"sandbox={config.use_sandbox}, auto_report={config.auto_report}"
            )
            _wechat_pay_service = WechatPayProvider(config)
    return _wechat_pay_service


async def shutdown_wechat_pay_service() -> None:
    global _wechat_pay_service

    if _wechat_pay_service is not None:
        await _wechat_pay_service.close()
        _wechat_pay_service = None
