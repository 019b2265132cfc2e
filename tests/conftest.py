from collections.abc import Generator
from datetime import date
from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient
import inject
import pytest

from app.application import create_fastapi_app
from app.config import Config, reset_config, set_config
from app.services.gateway.in_memory import InMemoryGateway
from app.services.sim_tax.assessment_query_service import AssessmentQueryService
from app.services.sim_tax.classifier import MessageClassifier
from app.services.sim_tax.grouping import ExtraElementGrouper
from app.services.sim_tax.objection_mapper import ObjectionMapper
from app.services.sim_tax.sim_tax_service import SimTaxService
from app.services.sim_tax.uniqueness_guard import UniquenessGuard
from app.stats import MemoryClient, Statsd
from tests.test_config import get_test_config

TODAY = date(2026, 10, 19)


@pytest.fixture()
def config() -> Config:
    return get_test_config()


@pytest.fixture()
def gateway(config: Config) -> InMemoryGateway:
    return InMemoryGateway(source_ref=config.sim_tax.source_ref)


@pytest.fixture()
def grouper() -> ExtraElementGrouper:
    return ExtraElementGrouper()


@pytest.fixture()
def query_service(gateway: InMemoryGateway, config: Config) -> AssessmentQueryService:
    return AssessmentQueryService(
        search_service=gateway,
        sync_service=gateway,
        config=config.sim_tax,
        today=lambda: TODAY,
    )


@pytest.fixture()
def objection_mapper() -> ObjectionMapper:
    return ObjectionMapper()


@pytest.fixture()
def uniqueness_guard(gateway: InMemoryGateway, config: Config) -> UniquenessGuard:
    return UniquenessGuard(
        synchronization_lookup=gateway,
        source_ref=config.sim_tax.source_ref,
        schema_ref=config.sim_tax.objection_schema_ref,
    )


@pytest.fixture()
def stats() -> Statsd:
    return Statsd(MemoryClient())


@pytest.fixture()
def sim_tax_service(
    gateway: InMemoryGateway,
    query_service: AssessmentQueryService,
    objection_mapper: ObjectionMapper,
    uniqueness_guard: UniquenessGuard,
    config: Config,
    stats: Statsd,
) -> SimTaxService:
    return SimTaxService(
        classifier=MessageClassifier(),
        query_service=query_service,
        objection_mapper=objection_mapper,
        uniqueness_guard=uniqueness_guard,
        object_store=gateway,
        event_dispatcher=gateway,
        config=config.sim_tax,
        stats=stats,
    )


@pytest.fixture
def fastapi_app() -> Generator[FastAPI, Any, None]:
    set_config(get_test_config())
    app = create_fastapi_app()
    yield app
    inject.clear()
    reset_config()


@pytest.fixture
def api_client(fastapi_app: FastAPI) -> TestClient:
    return TestClient(fastapi_app)
