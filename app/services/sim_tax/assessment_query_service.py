import logging
from datetime import date
from typing import Any, Callable, Dict, List

from app.config import ConfigSimTax
from app.models.message import paths
from app.models.message.dto import AssessmentFilter
from app.models.message.tree import MessageTree, text
from app.services.gateway.gateway import SearchService, SyncService
from app.services.sim_tax.errors import (
    AmbiguousAssessment,
    MissingAssessmentGroup,
    MissingCitizenId,
    MissingFieldError,
    SyncFailed,
)
from app.services.sim_tax.year_range import tax_years

logger = logging.getLogger(__name__)

ASSESSMENT_LINES = "assessmentLines"
OBJECTION_POSSIBLE = "objectionPossible"


def split_assessment_number(value: str | None) -> tuple[str | None, str | None]:
    """
    Splits a compound aanslagbiljetnummer ``<number>-<sequence>``.
    """
    if value is None:
        return None, None
    number, _, sequence = value.partition("-")
    return number or None, sequence or None


def apply_objection_possible(assessment: Dict[str, Any]) -> Dict[str, Any]:
    """
    An aanslag can only be objected to when all of its aanslagregels can be objected to,
    whatever the tax system says about the aanslag itself.
    """
    lines = assessment.get(ASSESSMENT_LINES) or []
    if any(isinstance(line, dict) and line.get(OBJECTION_POSSIBLE) is False for line in lines):
        assessment[OBJECTION_POSSIBLE] = False
    return assessment


class AssessmentQueryService:
    def __init__(
        self,
        search_service: SearchService,
        sync_service: SyncService,
        config: ConfigSimTax,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.__search_service = search_service
        self.__sync_service = sync_service
        self.__config = config
        self.__today = today

    def build_list_filter(self, body: MessageTree) -> AssessmentFilter:
        """
        Builds the filter for a Lv01-BLJ request. The first BLJ entry carries the first
        belastingjaar, the last entry the last belastingjaar.
        """
        if not body.has(paths.ASSESSMENT_GROUP):
            logger.error("No vraagBericht -> body -> BLJ found in xml body")
            raise MissingAssessmentGroup()

        entries = [MessageTree(e) for e in body.get_list(paths.ASSESSMENT_GROUP) if isinstance(e, dict)]
        citizen_ids = [entry.get_text(paths.GROUP_CITIZEN_ID) for entry in entries]
        years = [self.__entry_year(entry) for entry in entries]

        citizen_id = next((c for c in citizen_ids if c is not None), None)
        if citizen_id is None:
            logger.error("No bsn given in the Lv01-BLJ message")
            raise MissingCitizenId(status_code=501)

        min_year = max_year = None
        if len(set(citizen_ids)) == 1 and all(year is not None for year in years):
            min_year = years[0]
            max_year = years[-1] if len(years) > 1 else None

        return AssessmentFilter(
            citizen_id=str(citizen_id),
            tax_years=tax_years(min_year, max_year, len(entries), self.__today()),
        )

    def list_assessments(self, body: MessageTree) -> Dict[str, Any]:
        assessment_filter = self.build_list_filter(body)
        self.__sync(assessment_filter.citizen_id)  # type: ignore[arg-type]

        search_filter = assessment_filter.to_search_filter()
        result = self.__search_service.search(
            None, search_filter, {self.__config.assessment_schema_ref}
        )
        logger.info(f"Found {result.count} aanslagen")

        return {
            "count": result.count,
            "results": [apply_objection_possible(r) for r in result.results],
        }

    def build_get_filter(self, body: MessageTree) -> AssessmentFilter:
        number, sequence = split_assessment_number(body.get_text(paths.ASSESSMENT_NUMBER))
        separate_sequence = body.get_text(paths.ASSESSMENT_SEQUENCE_NUMBER)
        if separate_sequence is not None:
            sequence = str(separate_sequence)

        if number is None:
            logger.error("No aanslagBiljetNummer given in the Lv01-OPO message")
            raise MissingFieldError("assessmentNumber")

        return AssessmentFilter(assessment_number=number, assessment_sequence_number=sequence)

    def get_assessment(self, body: MessageTree) -> Dict[str, Any]:
        search_filter = self.build_get_filter(body).to_search_filter()
        result = self.__search_service.search(
            None, search_filter, {self.__config.assessment_schema_ref}
        )

        if result.count > 1:
            logger.error(f"More than one aanslag found ({result.count}) for the Lv01-OPO message")
            raise AmbiguousAssessment(result.count, search_filter)

        content: Dict[str, Any] = {"count": result.count}
        if result.count == 1 and result.results:
            content["result"] = apply_objection_possible(result.results[0])
        return content

    def __sync(self, citizen_id: str) -> None:
        if not self.__config.sync_before_search:
            return

        sync_result = self.__sync_service.fetch_and_sync(citizen_id)
        if sync_result.success:
            return

        logger.warning(f"Synchronization of aanslagen failed: {sync_result.error}")
        if self.__config.fail_on_sync_error:
            raise SyncFailed(sync_result.error)

    @staticmethod
    def __entry_year(entry: MessageTree) -> str | None:
        elements: List[Any] = entry.get_list(paths.EXTRA_ELEMENTS)
        if not elements:
            return None
        value = text(elements[0])
        return str(value) if value not in (None, "") else None
