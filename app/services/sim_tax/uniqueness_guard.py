import logging

from app.models.message.dto import ObjectionRecord
from app.services.gateway.gateway import SynchronizationLookup
from app.services.sim_tax.errors import DuplicateObjection

logger = logging.getLogger(__name__)


def composite_key(assessment_number: str | None, assessment_sequence_number: str | None) -> str:
    return f"{assessment_number}-{assessment_sequence_number}"


class UniquenessGuard:
    """
    Allows one bezwaar per aanslagbiljetnummer and aanslagbiljetvolgnummer.

    The lookup and the later create are separate calls, so the store is also asked to do a
    conditional create on the same key.
    """

    def __init__(
        self,
        synchronization_lookup: SynchronizationLookup,
        source_ref: str,
        schema_ref: str,
    ) -> None:
        self.__lookup = synchronization_lookup
        self.__source_ref = source_ref
        self.__schema_ref = schema_ref

    def check(self, record: ObjectionRecord) -> str:
        """
        Raises DuplicateObjection when a bezwaar is already linked to the aanslag, returns the
        composite key otherwise.
        """
        key = composite_key(record.assessment_number, record.assessment_sequence_number)
        synchronization = self.__lookup.find_by_composite_key(
            self.__source_ref, self.__schema_ref, key
        )
        if synchronization.linked_object_id is not None:
            logger.warning(f"Bezwaar for aanslag {key} already exists")
            raise DuplicateObjection(record.assessment_number, record.assessment_sequence_number)

        return key
