from typing import Optional

from fastapi import FastAPI

from paygate.api.routes import gateways, health, virtual_gateway
from paygate.core.config import Settings, get_settings
from paygate.core.logging import configure_logging, get_logger
from paygate.integrations.payment_gateways import GatewayRegistry, register_builtin_gateways


logger = get_logger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title=settings.app_name)
    application.state.settings = settings
    application.state.gateway_registry = register_builtin_gateways(GatewayRegistry(), settings)

    application.include_router(health.router)
    application.include_router(gateways.router)
    application.include_router(virtual_gateway.build_router(settings.virtual_gateway_path))

    logger.info(
        "application.created",
        environment=settings.environment,
        gateways=application.state.gateway_registry.names(),
    )
    return application


app = create_application()
