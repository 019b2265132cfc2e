import logging
from typing import Any, Dict

from pydantic import BaseModel

from app.models.message import paths
from app.models.message.dto import HandlerResult
from app.services.soap import xml_codec
from app.services.soap.response_mapper import map_response

logger = logging.getLogger(__name__)

SOAP_MEDIA_TYPE = "application/soap+xml; charset=utf-8"


class SoapResponse(BaseModel):
    body: bytes
    status_code: int
    media_type: str = SOAP_MEDIA_TYPE


def wrap(content: Dict[str, Any]) -> Dict[str, Any]:
    return {paths.SOAP_BODY: content}


def create_response(result: HandlerResult) -> SoapResponse:
    logger.debug("Creating XML response")
    body = xml_codec.encode(wrap(map_response(result)))
    return SoapResponse(body=body, status_code=result.status_code)
