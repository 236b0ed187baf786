"""微信支付下单与回调路由"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from exceptions.common import BadRequestError, PaymentFailedError, PaymentNotConfiguredError
from libs.helper import extract_remote_ip
from libs.payment import WechatPayProvider, build_notify_response, get_wechat_pay_service
from schemas.payment import (
    H5PayResponse,
    MinappPayRequest,
    MinappPayResponse,
    NativePayResponse,
    UnifiedOrderRequest,
)
from schemas.response import ApiResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payment/wechat", tags=["WeChat Pay"])

XML_MEDIA_TYPE = "application/xml"


def _client_ip(request: Request) -> str:
    ip = extract_remote_ip(request)
    if not ip:
        raise BadRequestError("无法获取客户端 IP")
    return ip


@router.post("/native", response_model=ApiResponse[NativePayResponse])
async def create_native_order(
    data: UnifiedOrderRequest,
    request: Request,
    provider: WechatPayProvider = Depends(get_wechat_pay_service),
):
    """扫码支付下单"""
    result = await provider.native_pay(data.to_order(), _client_ip(request))
    if not result.success:
        raise PaymentFailedError(result.error_msg)
    return ApiResponse(data=NativePayResponse(out_trade_no=data.out_trade_no, code_url=result.data))


@router.post("/h5", response_model=ApiResponse[H5PayResponse])
async def create_h5_order(
    data: UnifiedOrderRequest,
    request: Request,
    provider: WechatPayProvider = Depends(get_wechat_pay_service),
):
    """H5 支付下单"""
    result = await provider.h5_pay(data.to_order(), _client_ip(request))
    if not result.success:
        raise PaymentFailedError(result.error_msg)
    return ApiResponse(data=H5PayResponse(out_trade_no=data.out_trade_no, mweb_url=result.data))


@router.post("/minapp", response_model=ApiResponse[MinappPayResponse])
async def create_minapp_order(
    data: MinappPayRequest,
    request: Request,
    provider: WechatPayProvider = Depends(get_wechat_pay_service),
):
    """小程序支付下单，返回 wx.requestPayment 所需参数"""
    result = await provider.minapp_pay(data.to_order(), data.open_id, _client_ip(request))
    if not result.success:
        raise PaymentFailedError(result.error_msg)
    return ApiResponse(data=MinappPayResponse.model_validate(result.data))


@router.post("/notify")
async def wechat_pay_notify(request: Request):
    """
    微信支付结果通知

    无论校验结果如何都返回 HTTP 200 与 XML 应答，校验失败时 return_code 为 FAIL。
    """
    try:
        provider = await get_wechat_pay_service()
        body = await request.body()
        result = await provider.handle_notify(body)
    except PaymentNotConfiguredError:
        logger.warning("微信支付未配置，无法处理支付结果通知")
        return Response(
            content=build_notify_response(False, "payment not configured"),
            media_type=XML_MEDIA_TYPE,
        )
    except Exception as e:
        logger.exception(f"微信支付回调异常: {e}")
        return Response(content=build_notify_response(False, "系统错误"), media_type=XML_MEDIA_TYPE)

    if result.success:
        logger.info(f"微信支付回调：支付成功 out_trade_no={result.out_trade_no}")
    else:
        logger.error(f"微信支付回调验证失败: {result.error_msg}")

    return Response(content=provider.get_callback_response(result), media_type=XML_MEDIA_TYPE)
