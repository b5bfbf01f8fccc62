from fastapi import Request

from paygate.integrations.payment_gateways import GatewayRegistry, HttpContext


async def get_http_context(request: Request) -> HttpContext:
    return await HttpContext.from_request(request)


def get_gateway_registry(request: Request) -> GatewayRegistry:
    return request.app.state.gateway_registry
