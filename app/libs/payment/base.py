"""支付服务基类"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

_FEN_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Order:
    """待支付订单，提交支付后不可变"""

    id: str  # 商户订单号
    body: str  # 商品描述
    fee_type: str  # 币种，如 CNY
    price: str  # 金额（分），整数字符串

    def __post_init__(self):
        if not self.id:
            raise ValueError("order id is required")
        if not _FEN_PATTERN.fullmatch(self.price):
            raise ValueError(f"order price must be an integer string in fen: {self.price!r}")


@dataclass(frozen=True)
class PaymentResult(Generic[T]):
    """下单结果，成功时携带支付凭据，失败时携带错误信息，二者互斥"""

    success: bool
    data: T | None = None  # 二维码链接 / H5 跳转链接 / 小程序支付参数
    error_code: str | None = None
    error_msg: str | None = None

    def __post_init__(self):
        if self.success:
            if not self.data:
                raise ValueError("successful payment result requires data")
            if self.error_code or self.error_msg:
                raise ValueError("successful payment result must not carry an error")
        else:
            if not self.error_msg:
                raise ValueError("failed payment result requires an error message")
            if self.data is not None:
                raise ValueError("failed payment result must not carry data")

    @classmethod
    def ok(cls, data: T) -> "PaymentResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error_msg: str, error_code: str | None = None) -> "PaymentResult[T]":
        return cls(success=False, error_code=error_code or None, error_msg=error_msg)


@dataclass(frozen=True)
class MinappPayParams:
    """小程序调起支付所需参数"""

    time_stamp: str
    nonce_str: str
    prepay_id: str
    sign_type: str
    pay_sign: str

    @property
    def package(self) -> str:
        return f"prepay_id={self.prepay_id}"


@dataclass(frozen=True)
class NotifyResult:
    """支付结果通知的校验结果"""

    success: bool
    out_trade_no: str | None = None  # 商户订单号，仅成功时存在
    error_msg: str | None = None  # 仅失败时存在
    return_body: str | None = None  # 需要原样返回给微信的应答，仅成功时存在

    def __post_init__(self):
        if self.success:
            if not self.out_trade_no or not self.return_body:
                raise ValueError("successful notify result requires out_trade_no and return_body")
            if self.error_msg:
                raise ValueError("successful notify result must not carry an error")
        else:
            if not self.error_msg:
                raise ValueError("failed notify result requires an error message")
            if self.out_trade_no or self.return_body:
                raise ValueError("failed notify result must not carry order data")

    @classmethod
    def ok(cls, out_trade_no: str, return_body: str) -> "NotifyResult":
        return cls(success=True, out_trade_no=out_trade_no, return_body=return_body)

    @classmethod
    def fail(cls, error_msg: str) -> "NotifyResult":
        return cls(success=False, error_msg=error_msg)


class PaymentProvider(ABC):
    """支付服务提供者基类"""

    @abstractmethod
    async def native_pay(self, order: Order, client_ip: str) -> PaymentResult[str]:
        """
        扫码支付下单

        Args:
            order: 订单
            client_ip: 发起支付的终端 IP

        Returns:
            PaymentResult: 成功时 data 为二维码链接
        """
        pass

    @abstractmethod
    async def handle_notify(self, body: bytes | str) -> NotifyResult:
        """
        验证支付结果通知

        Args:
            body: 请求体原始数据

        Returns:
            NotifyResult: 验证结果，不抛出异常
        """
        pass

    @abstractmethod
    def get_callback_response(self, result: NotifyResult) -> str:
        """
        生成回调响应

        Args:
            result: 通知校验结果

        Returns:
            响应内容（不同支付平台格式不同）
        """
        pass
