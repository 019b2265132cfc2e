import logging
from typing import Any, Dict

from app.config import ConfigSimTax
from app.models.message.dto import (
    HandlerResult,
    MessageEnvelope,
    MessageVariant,
    OperationKind,
)
from app.models.message.tree import RequestTree
from app.services.gateway.gateway import DuplicateKeyError, EventDispatcher, ObjectStore
from app.services.sim_tax.assessment_query_service import AssessmentQueryService
from app.services.sim_tax.classifier import MessageClassifier
from app.services.sim_tax.errors import (
    DownstreamError,
    DuplicateObjection,
    PersistFailed,
    SimTaxError,
    UnrecognizedOperation,
)
from app.services.sim_tax.objection_mapper import ObjectionMapper
from app.services.sim_tax.uniqueness_guard import UniquenessGuard
from app.stats import Stats, get_stats

logger = logging.getLogger(__name__)

EXPECTED_VARIANTS: Dict[OperationKind, MessageVariant] = {
    OperationKind.LIST_ASSESSMENTS: MessageVariant.REQUEST,
    OperationKind.GET_ASSESSMENT: MessageVariant.REQUEST,
    OperationKind.CREATE_OBJECTION: MessageVariant.NOTIFICATION,
}


class SimTaxService:
    """
    Handles a decoded SimTax StUF message: classifies it on berichtsoort and entiteittype and
    runs the matching operation. Every outcome, including errors, is returned as a result
    with a status code.
    """

    def __init__(
        self,
        classifier: MessageClassifier,
        query_service: AssessmentQueryService,
        objection_mapper: ObjectionMapper,
        uniqueness_guard: UniquenessGuard,
        object_store: ObjectStore,
        event_dispatcher: EventDispatcher,
        config: ConfigSimTax,
        stats: Stats | None = None,
    ) -> None:
        self.__classifier = classifier
        self.__query_service = query_service
        self.__objection_mapper = objection_mapper
        self.__uniqueness_guard = uniqueness_guard
        self.__object_store = object_store
        self.__event_dispatcher = event_dispatcher
        self.__config = config
        self.__stats = stats

    @property
    def stats(self) -> Stats:
        return self.__stats or get_stats()

    def handle(self, request: RequestTree) -> HandlerResult:
        logger.debug("SimTaxService -> handle()")
        envelope: MessageEnvelope | None = None
        operation: OperationKind | None = None
        try:
            envelope = self.__classifier.read_envelope(request)
            operation = self.__classifier.classify(envelope)
            self.stats.inc(f"simtax.message.{operation.name.lower()}")

            with self.stats.timer(f"simtax.timing.{operation.name.lower()}"):
                content = self.__dispatch(operation, envelope)

            return HandlerResult(content=content, operation=operation, header=envelope.header)
        except SimTaxError as e:
            self.stats.inc(f"simtax.error.{e.status_code}")
            return HandlerResult(
                content=e.to_content(),
                status_code=e.status_code,
                operation=operation,
                header=envelope.header if envelope else None,
            )
        except Exception as e:
            logger.exception(f"Unexpected error while handling message: {e}")
            self.stats.inc("simtax.error.500")
            return HandlerResult(
                content={"Error": "An error occurred while processing the message"},
                status_code=500,
                operation=operation,
                header=envelope.header if envelope else None,
            )

    def __dispatch(self, operation: OperationKind, envelope: MessageEnvelope) -> Dict[str, Any]:
        expected_variant = EXPECTED_VARIANTS.get(operation)
        if expected_variant is not None and envelope.variant is not expected_variant:
            logger.warning(
                f"{operation.value} message received as {envelope.variant.value}, expected {expected_variant.value}"
            )

        match operation:
            case OperationKind.LIST_ASSESSMENTS:
                return self.__query_service.list_assessments(envelope.body)
            case OperationKind.GET_ASSESSMENT:
                return self.__query_service.get_assessment(envelope.body)
            case OperationKind.CREATE_OBJECTION:
                return self.create_objection(envelope)
            case _:
                logger.warning(
                    "Unknown berichtsoort & entiteittype combination, returning bad request error"
                )
                raise UnrecognizedOperation(
                    envelope.header.berichtsoort, envelope.header.entiteittype
                )

    def create_objection(self, envelope: MessageEnvelope) -> Dict[str, Any]:
        """
        Maps the bezwaar, checks that no bezwaar exists for the same aanslag, stores it and
        notifies listeners.
        """
        record = self.__objection_mapper.map(envelope.header, envelope.body)
        key = self.__uniqueness_guard.check(record)

        try:
            created = self.__object_store.create(
                self.__config.objection_schema_ref, record.to_record(), unique_key=key
            )
        except DuplicateKeyError:
            logger.warning(f"Bezwaar for aanslag {key} was created concurrently")
            raise DuplicateObjection(record.assessment_number, record.assessment_sequence_number)

        if created.errors:
            logger.error(f"Could not store bezwaar: {created.errors}")
            raise PersistFailed(created.errors)

        stored = {**record.to_record(), "id": created.id}
        response = self.__event_dispatcher.publish(
            self.__config.objection_event_type, {"object": stored, "id": created.id}
        )
        if isinstance(response, dict) and "Error" in response:
            logger.error("Bezwaar event returned an error")
            raise DownstreamError(response["Error"])

        logger.info(f"Bezwaar {created.id} created for aanslag {key}")
        return {"id": created.id, "record": stored}
