from fastapi import APIRouter, Depends

from paygate.api.dependencies.gateways import get_gateway_registry
from paygate.integrations.payment_gateways import GatewayRegistry


router = APIRouter(prefix="/gateways", tags=["gateways"])


@router.get("")
async def list_gateways_endpoint(
    registry: GatewayRegistry = Depends(get_gateway_registry),
) -> dict[str, list[str]]:
    return {"gateways": sorted(registry.names())}
