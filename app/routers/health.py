import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.container import get_gateway
from app.services.gateway.gateway import Gateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=dict[str, Any], description="Check the health of the host platform")
def health(gateway: Gateway = Depends(get_gateway)) -> Dict[str, Any]:
    healthy = gateway.is_healthy()
    if not healthy:
        logger.warning("Host platform is not healthy")

    return {"status": "ok" if healthy else "error", "components": {"gateway": "ok" if healthy else "error"}}
