"""支付相关请求/响应模型"""

from pydantic import BaseModel, ConfigDict, Field

from libs.payment import Order


class UnifiedOrderRequest(BaseModel):
    """统一下单请求"""

    out_trade_no: str = Field(
        ..., min_length=1, max_length=32, pattern=r"^[0-9A-Za-z_\-|*@]+$", description="商户订单号"
    )
    body: str = Field(..., min_length=1, max_length=128, description="商品描述")
    fee_type: str = Field(default="CNY", pattern="^[A-Z]{3}$", description="币种")
    total_fee: int = Field(..., gt=0, description="订单金额（分）")

    def to_order(self) -> Order:
        return Order(
            id=self.out_trade_no,
            body=self.body,
            fee_type=self.fee_type,
            price=str(self.total_fee),
        )


class MinappPayRequest(UnifiedOrderRequest):
    """小程序支付请求"""

    open_id: str = Field(..., min_length=1, max_length=128, description="用户在商户 appid 下的 openid")


class NativePayResponse(BaseModel):
    """扫码支付响应"""

    out_trade_no: str
    code_url: str


class H5PayResponse(BaseModel):
    """H5 支付响应"""

    out_trade_no: str
    mweb_url: str


class MinappPayResponse(BaseModel):
    """小程序调起支付参数"""

    time_stamp: str
    nonce_str: str
    package: str
    sign_type: str
    pay_sign: str
    prepay_id: str

    model_config = ConfigDict(from_attributes=True)
