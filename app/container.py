import inject

from app.config import get_config
from app.services.gateway.factory import GatewayFactory
from app.services.gateway.gateway import Gateway
from app.services.sim_tax.assessment_query_service import AssessmentQueryService
from app.services.sim_tax.classifier import MessageClassifier
from app.services.sim_tax.objection_mapper import ObjectionMapper
from app.services.sim_tax.sim_tax_service import SimTaxService
from app.services.sim_tax.uniqueness_guard import UniquenessGuard


def container_config(binder: inject.Binder) -> None:
    config = get_config()

    gateway = GatewayFactory(config.gateway, source_ref=config.sim_tax.source_ref).create()
    binder.bind(Gateway, gateway)

    sim_tax_service = SimTaxService(
        classifier=MessageClassifier(),
        query_service=AssessmentQueryService(
            search_service=gateway,
            sync_service=gateway,
            config=config.sim_tax,
        ),
        objection_mapper=ObjectionMapper(),
        uniqueness_guard=UniquenessGuard(
            synchronization_lookup=gateway,
            source_ref=config.sim_tax.source_ref,
            schema_ref=config.sim_tax.objection_schema_ref,
        ),
        object_store=gateway,
        event_dispatcher=gateway,
        config=config.sim_tax,
    )
    binder.bind(SimTaxService, sim_tax_service)


def get_gateway() -> Gateway:
    return inject.instance(Gateway)  # type: ignore


def get_sim_tax_service() -> SimTaxService:
    return inject.instance(SimTaxService)


def setup_container() -> None:
    inject.configure(container_config, once=True)
