import logging
from datetime import datetime
from typing import Any, List

from app.models.message import paths
from app.models.message.dto import (
    Attachment,
    ExtraElement,
    MessageHeader,
    ObjectionRecord,
    Taxpayer,
)
from app.models.message.tree import MessageTree, text
from app.services.sim_tax.errors import MissingFieldError, MissingMessageField
from app.services.sim_tax.grouping import ExtraElementGrouper

logger = logging.getLogger(__name__)

DATE_FORMATS = (
    ("%Y%m%d%H%M%S%f", 20),
    ("%Y%m%d", 8),
)


def parse_application_date(value: Any) -> str | None:
    """
    Parses a StUF timestamp (``YYYYMMDDHHmmssuuuuuu``) or date (``YYYYMMDD``) into ``YYYY-MM-DD``.
    """
    if value is None:
        return None
    raw = str(value).strip()
    if not raw.isdigit():
        return None

    for date_format, length in DATE_FORMATS:
        if len(raw) != length:
            continue
        try:
            return datetime.strptime(raw, date_format).date().isoformat()
        except ValueError:
            continue

    logger.warning("Could not parse aanvraagdatum, leaving it empty")
    return None


def read_extra_elements(objection: MessageTree) -> List[ExtraElement]:
    elements = []
    for element in objection.get_list(paths.EXTRA_ELEMENTS):
        if not isinstance(element, dict) or paths.EXTRA_ELEMENT_NAME not in element:
            logger.warning("Skipping extra element without naam")
            continue
        value = text(element)
        elements.append(
            ExtraElement(
                name=str(element[paths.EXTRA_ELEMENT_NAME]),
                value="" if value is None else str(value),
            )
        )
    return elements


def read_attachments(objection: MessageTree) -> List[Attachment]:
    attachments = []
    for item in objection.get_list(paths.ATTACHMENTS):
        attachment = MessageTree(item)
        attachments.append(
            Attachment(
                file_name=attachment.get_text(paths.ATTACHMENT_FILE_NAME),
                file_type=attachment.get_text(paths.ATTACHMENT_FILE_TYPE),
                file_content=attachment.get_text(paths.ATTACHMENT_FILE_CONTENT),
            )
        )
    return attachments


class ObjectionMapper:
    """
    Maps a Lk01-BGB kennisgevingsBericht to a bezwaar record.
    """

    def __init__(self, grouper: ExtraElementGrouper | None = None) -> None:
        self.__grouper = grouper or ExtraElementGrouper()

    def validate(self, header: MessageHeader, body: MessageTree) -> None:
        objection = body.subtree(paths.OBJECTION)
        required = [
            ("referentienummer", header.referentienummer),
            ("tijdstipBericht", header.tijdstip_bericht),
            ("citizenId", objection.get_text(paths.OBJECTION_CITIZEN_ID)),
            ("extraElementen", objection.get(paths.EXTRA_ELEMENTS_CONTAINER)),
        ]
        for field, value in required:
            if value is None:
                logger.error(f"No {field} found in the Lk01-BGB message")
                raise MissingMessageField(field)

    def map(self, header: MessageHeader, body: MessageTree) -> ObjectionRecord:
        self.validate(header, body)
        objection = body.subtree(paths.OBJECTION)

        application_number = objection.get_text(paths.APPLICATION_NUMBER)
        record = ObjectionRecord(
            application_number=None if application_number is None else str(application_number),
            application_date=parse_application_date(objection.get_text(paths.APPLICATION_DATE)),
            wants_to_be_heard=objection.get_text(paths.WANTS_TO_BE_HEARD) == "J",
            taxpayer=Taxpayer(citizen_id=str(objection.get_text(paths.OBJECTION_CITIZEN_ID))),
            attachments=read_attachments(objection),
        )

        grouping = self.__grouper.group(read_extra_elements(objection))
        record.assessment_number = grouping.assessment_number
        record.assessment_sequence_number = grouping.assessment_sequence_number
        record.assessment_line_objections = grouping.assessment_line_objections
        record.decision_line_objections = grouping.decision_line_objections

        missing = record.missing_fields()
        if missing:
            logger.error(f"Bezwaar is incomplete, missing {', '.join(missing)}")
            raise MissingFieldError(missing[0])

        return record
