import logging

from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from app.container import get_sim_tax_service
from app.models.message.dto import HandlerResult
from app.services.sim_tax.sim_tax_service import SimTaxService
from app.services.soap import xml_codec
from app.services.soap.envelope import create_response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/sim-tax", tags=["SimTax StUF"])


@router.post("", response_class=Response, summary="Handle a SimTax StUF message")
async def handle_message(
    request: Request,
    service: SimTaxService = Depends(get_sim_tax_service),
) -> Response:
    try:
        tree = xml_codec.decode(await request.body())
    except xml_codec.XmlDecodeError:
        result = HandlerResult(content={"Error": "Could not parse the xml body"}, status_code=400)
    else:
        result = await run_in_threadpool(service.handle, tree)

    if result.is_error:
        logger.info(f"Returning error response with status {result.status_code}")

    soap_response = create_response(result)
    return Response(
        content=soap_response.body,
        status_code=soap_response.status_code,
        media_type=soap_response.media_type,
    )
