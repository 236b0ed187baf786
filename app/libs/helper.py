from fastapi import Request

from configs import app_config


def extract_remote_ip(request: Request) -> str:
    """
    获取发起请求的客户端 IP

    开启 TRUSTED_PROXY_HEADERS 时优先使用 CF-Connecting-IP，其次是
    X-Forwarded-For 的第一跳，最后回退到对端地址。
    """
    if app_config.TRUSTED_PROXY_HEADERS:
        cf_ip = request.headers.get("CF-Connecting-IP")
        if cf_ip:
            return cf_ip.strip()
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            first_hop = forwarded_for.split(",")[0].strip()
            if first_hop:
                return first_hop
    return request.client.host if request.client else ""
