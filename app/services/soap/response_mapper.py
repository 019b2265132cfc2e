from typing import Any, Dict

from app.models.message import paths
from app.models.message.dto import HandlerResult, MessageHeader, OperationKind

ANSWER_BERICHTSOORT = "La01"
ACKNOWLEDGEMENT_BERICHTSOORT = "Bv01"


def _stuurgegevens(header: MessageHeader | None, berichtsoort: str) -> Dict[str, Any]:
    header = header or MessageHeader()
    return {
        paths.BERICHTSOORT: berichtsoort,
        paths.ENTITEITTYPE: header.entiteittype,
        paths.CROSS_REFNUMMER: header.referentienummer,
    }


def map_response(result: HandlerResult) -> Dict[str, Any]:
    """
    Maps the content of a successful result to a StUF antwoord (La01) for vraagBerichten or a
    bevestiging (Bv01) for kennisgevingsBerichten. Error content is returned as is.
    """
    if result.is_error or result.operation is None:
        return result.content

    if result.operation is OperationKind.CREATE_OBJECTION:
        return {
            "ns1:bevestigingsBericht": {
                paths.STUURGEGEVENS: _stuurgegevens(result.header, ACKNOWLEDGEMENT_BERICHTSOORT),
            }
        }

    objects = []
    if result.operation is OperationKind.LIST_ASSESSMENTS:
        objects = result.content.get("results", [])
    elif "result" in result.content:
        objects = [result.content["result"]]

    return {
        "ns2:antwoordBericht": {
            paths.STUURGEGEVENS: _stuurgegevens(result.header, ANSWER_BERICHTSOORT),
            "ns2:antwoord": {"ns2:object": objects},
        }
    }
