"""微信支付客户端配置"""

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .client import WXPayClient
from .constants import DOMAIN_API

if TYPE_CHECKING:
    from configs.payment import PaymentConfig
    from libs.http_client import HttpClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WXPayConfig:
    """
    微信支付客户端配置

    构建完成后不可变，可在并发请求间共享。沙箱模式下 ``key`` 会被
    :func:`build_config` 替换为从微信获取的沙箱密钥。
    """

    app_id: str
    mch_id: str
    key: str = field(repr=False)
    notify_url: str
    use_sandbox: bool = False
    cert_path: str | None = None
    domain: str = DOMAIN_API
    http_connect_timeout_ms: int = 6000
    http_read_timeout_ms: int = 8000

    # 上报参数，仅透传
    auto_report: bool = True
    report_worker_num: int = 6
    report_queue_max_size: int = 10000
    report_batch_size: int = 10

    def __post_init__(self):
        missing = [
            name
            for name in ("app_id", "mch_id", "key", "notify_url")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(f"微信支付配置不完整，缺少: {', '.join(missing)}")
        if self.http_connect_timeout_ms <= 0 or self.http_read_timeout_ms <= 0:
            raise ValueError("微信支付超时时间必须为正数")

    @classmethod
    def from_settings(cls, settings: "PaymentConfig") -> "WXPayConfig":
        return cls(
            app_id=settings.WECHAT_PAY_APP_ID,
            mch_id=settings.WECHAT_PAY_MCH_ID,
            key=settings.WECHAT_PAY_KEY,
            notify_url=settings.WECHAT_PAY_NOTIFY_URL,
            use_sandbox=settings.WECHAT_PAY_SANDBOX,
            cert_path=settings.WECHAT_PAY_CERT_PATH or None,
            domain=settings.WECHAT_PAY_DOMAIN,
            http_connect_timeout_ms=settings.WECHAT_PAY_HTTP_CONNECT_TIMEOUT_MS,
            http_read_timeout_ms=settings.WECHAT_PAY_HTTP_READ_TIMEOUT_MS,
            auto_report=settings.WECHAT_PAY_AUTO_REPORT,
            report_worker_num=settings.WECHAT_PAY_REPORT_WORKER_NUM,
            report_queue_max_size=settings.WECHAT_PAY_REPORT_QUEUE_MAX_SIZE,
            report_batch_size=settings.WECHAT_PAY_REPORT_BATCH_SIZE,
        )

    @property
    def api_base_url(self) -> str:
        return f"https://{self.domain}"

    def with_key(self, key: str) -> "WXPayConfig":
        return replace(self, key=key)


async def build_config(
    raw: "WXPayConfig | PaymentConfig",
    http_client: "HttpClient | None" = None,
) -> WXPayConfig:
    """
    构建最终使用的配置

    非沙箱模式直接返回；沙箱模式下使用商户密钥签名请求沙箱密钥，
    获取失败抛出 SandboxKeyError，调用方不应继续构建服务。
    """
    config = raw if isinstance(raw, WXPayConfig) else WXPayConfig.from_settings(raw)
    if not config.use_sandbox:
        return config

    client = WXPayClient(config, http_client=http_client)
    try:
        sandbox_key = await client.get_sandbox_sign_key()
    finally:
        if http_client is None:
            await client.close()

    logger.info(f"已获取微信支付沙箱密钥: mch_id={config.mch_id}")
    return config.with_key(sandbox_key)
