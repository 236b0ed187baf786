from fastapi import HTTPException


class BaseHTTPException(HTTPException):
    status_code: int = 400
    detail: str = ""

    def __init__(self, detail: str | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.detail)


# =============================================================================
# 请求参数异常 (400)
# =============================================================================
class BadRequestError(BaseHTTPException):
    status_code = 400
    detail = "Bad request."


class PaymentFailedError(BaseHTTPException):
    status_code = 400
    detail = "Payment request failed."


# =============================================================================
# 服务不可用 (503)
# =============================================================================
class PaymentNotConfiguredError(BaseHTTPException):
    status_code = 503
    detail = "Payment service is not configured."
