from pydantic import Field
from pydantic_settings import BaseSettings


class CommonConfig(BaseSettings):
    # CORS Configuration
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    TRUSTED_PROXY_HEADERS: bool = Field(
        default=True,
        description="是否信任 CF-Connecting-IP / X-Forwarded-For 头来获取客户端 IP",
    )
