import pytest

from app.config import ConfigGateway
from app.services.api.authenticators.api_key_authenticator import ApiKeyAuthenticator
from app.services.gateway.factory import GatewayFactory
from app.services.gateway.http_gateway import HttpGateway
from app.services.gateway.in_memory import InMemoryGateway


def test_create_should_return_in_memory_gateway() -> None:
    assert isinstance(GatewayFactory(ConfigGateway(backend="memory")).create(), InMemoryGateway)


def test_create_should_pass_source_to_in_memory_gateway() -> None:
    gateway = GatewayFactory(ConfigGateway(backend="memory"), source_ref="source").create()

    result = gateway.create("schema", {}, unique_key="1-2")

    assert gateway.find_by_composite_key("source", "schema", "1-2").linked_object_id == result.id


def test_create_should_return_http_gateway() -> None:
    config = ConfigGateway(
        backend="http", base_url="https://objects.example.com/api", authentication="api_key", api_key="Token abc"
    )

    gateway = GatewayFactory(config).create()

    assert isinstance(gateway, HttpGateway)


def test_create_should_require_base_url_for_http() -> None:
    with pytest.raises(ValueError):
        GatewayFactory(ConfigGateway(backend="http")).create()


def test_config_should_reject_unknown_backend() -> None:
    with pytest.raises(ValueError):
        ConfigGateway(backend="sqlite")


def test_api_key_authenticator_should_not_set_requests_auth() -> None:
    assert ApiKeyAuthenticator("Token abc").get_auth() is None
