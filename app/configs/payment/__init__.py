"""支付配置"""

from pydantic import Field, NonNegativeInt, PositiveInt
from pydantic_settings import BaseSettings


class PaymentConfig(BaseSettings):
    """微信支付 (v2 / XML 接口) 相关配置"""

    WECHAT_PAY_APP_ID: str = Field(default="", description="微信支付 APP ID")
    WECHAT_PAY_MCH_ID: str = Field(default="", description="微信支付商户号")
    WECHAT_PAY_KEY: str = Field(default="", description="微信支付 API 密钥")
    WECHAT_PAY_NOTIFY_URL: str = Field(default="", description="微信支付回调通知地址")
    WECHAT_PAY_SANDBOX: bool = Field(default=False, description="是否使用微信支付仿真测试环境")
    WECHAT_PAY_CERT_PATH: str | None = Field(
        default=None, description="商户证书文件路径（PEM），可选"
    )
    WECHAT_PAY_DOMAIN: str = Field(
        default="api.mch.weixin.qq.com", description="微信支付 API 域名"
    )

    WECHAT_PAY_HTTP_CONNECT_TIMEOUT_MS: PositiveInt = Field(
        default=6000, description="连接超时时间（毫秒）"
    )
    WECHAT_PAY_HTTP_READ_TIMEOUT_MS: PositiveInt = Field(
        default=8000, description="读取超时时间（毫秒）"
    )

    # 上报相关参数，仅透传给客户端配置
    WECHAT_PAY_AUTO_REPORT: bool = Field(default=True, description="是否自动上报请求耗时")
    WECHAT_PAY_REPORT_WORKER_NUM: NonNegativeInt = Field(default=6, description="上报线程数")
    WECHAT_PAY_REPORT_QUEUE_MAX_SIZE: PositiveInt = Field(
        default=10000, description="上报队列最大长度"
    )
    WECHAT_PAY_REPORT_BATCH_SIZE: PositiveInt = Field(default=10, description="批量上报条数")

    @property
    def wechat_pay_enabled(self) -> bool:
        """判断微信支付是否配置完整"""
        return bool(
            self.WECHAT_PAY_APP_ID
            and self.WECHAT_PAY_MCH_ID
            and self.WECHAT_PAY_KEY
            and self.WECHAT_PAY_NOTIFY_URL
        )
