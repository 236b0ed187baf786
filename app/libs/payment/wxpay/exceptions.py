class WXPayError(Exception):
    """微信支付请求或响应处理失败"""


class SandboxKeyError(WXPayError):
    """获取沙箱签名密钥失败，服务无法继续构建"""
