import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from configs import app_config
from exceptions import exception_handler
from libs.payment import get_wechat_pay_service, shutdown_wechat_pay_service
from middlewares.http_middleware import CustomMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up the FastAPI application...")
    if app_config.wechat_pay_enabled:
        # 沙箱密钥获取失败时直接中止启动
        await get_wechat_pay_service()
    else:
        logger.warning("微信支付配置不完整，支付接口将返回 503")
    yield
    await shutdown_wechat_pay_service()


def config_router(app: FastAPI):
    from routers import payment

    app.include_router(payment.router)


def initialize_extensions(app: FastAPI):
    from extensions import ext_logging

    extensions = [ext_logging]
    for ext in extensions:
        short_name = ext.__name__.split(".")[-1]
        is_enabled = ext.is_enabled() if hasattr(ext, "is_enabled") else True
        if not is_enabled:
            if app_config.DEBUG:
                logger.info("Skipped %s", short_name)
            continue

        start_time = time.perf_counter()
        ext.init_app(app)
        end_time = time.perf_counter()
        if app_config.DEBUG:
            logger.info(
                "Loaded %s (%s ms)",
                short_name,
                round((end_time - start_time) * 1000, 2),
            )


def create_app() -> FastAPI:
    app = FastAPI(
        title=app_config.PROJECT_NAME,
        lifespan=lifespan,
        version="1.0.0",
        openapi_url="/api/openapi.json",
    )
    initialize_extensions(app)

    cors_origins = [
        origin.strip() for origin in app_config.CORS_ORIGINS.split(",") if origin.strip()
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CustomMiddleware)

    config_router(app)
    exception_handler.set_up(app)

    logger.info(f"FastAPI 应用创建完成: {app_config.PROJECT_NAME}")
    return app
