import logging
from typing import Dict, Tuple

from app.models.message import paths
from app.models.message.dto import (
    MessageEnvelope,
    MessageHeader,
    MessageVariant,
    OperationKind,
)
from app.models.message.tree import MessageTree, RequestTree
from app.services.sim_tax.errors import MissingHeader

logger = logging.getLogger(__name__)

OPERATIONS: Dict[Tuple[str, str], OperationKind] = {
    ("Lv01", "BLJ"): OperationKind.LIST_ASSESSMENTS,
    ("Lv01", "OPO"): OperationKind.GET_ASSESSMENT,
    ("Lk01", "BGB"): OperationKind.CREATE_OBJECTION,
}


def classify(berichtsoort: str | None, entiteittype: str | None) -> OperationKind:
    if berichtsoort is None or entiteittype is None:
        return OperationKind.UNRECOGNIZED
    return OPERATIONS.get((berichtsoort, entiteittype), OperationKind.UNRECOGNIZED)


class MessageClassifier:
    """
    Locates the message envelope in a decoded SOAP body and reads its stuurgegevens.
    """

    def read_envelope(self, request: RequestTree) -> MessageEnvelope:
        tree = MessageTree(request)
        soap_body = tree.subtree(paths.SOAP_BODY) if tree.has(paths.SOAP_BODY) else tree

        for variant in (MessageVariant.REQUEST, MessageVariant.NOTIFICATION):
            message = soap_body.subtree(variant.value)
            if not message.has(paths.STUURGEGEVENS):
                continue

            stuurgegevens = message.subtree(paths.STUURGEGEVENS)
            header = MessageHeader(
                berichtsoort=stuurgegevens.get_text(paths.BERICHTSOORT),
                entiteittype=stuurgegevens.get_text(paths.ENTITEITTYPE),
                referentienummer=stuurgegevens.get_text(paths.REFERENTIENUMMER),
                tijdstip_bericht=stuurgegevens.get_text(paths.TIJDSTIP_BERICHT),
            )
            logger.debug(
                f"BerichtSoort {header.berichtsoort} & entiteittype {header.entiteittype}"
            )
            return MessageEnvelope(variant=variant, header=header, body=message)

        logger.error("No vraagBericht or kennisgevingsBericht -> stuurgegevens found in xml body")
        raise MissingHeader()

    def classify(self, envelope: MessageEnvelope) -> OperationKind:
        return classify(envelope.header.berichtsoort, envelope.header.entiteittype)
