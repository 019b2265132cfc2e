import logging

from app.config import ConfigGateway
from app.services.api.api_service import HttpService
from app.services.api.authenticators.factory import AuthenticatorFactory
from app.services.gateway.gateway import Gateway
from app.services.gateway.http_gateway import HttpGateway
from app.services.gateway.in_memory import InMemoryGateway

logger = logging.getLogger(__name__)


class GatewayFactory:
    """
    Creates the host platform gateway based on configuration.
    """

    def __init__(self, config: ConfigGateway, source_ref: str | None = None) -> None:
        self.__config = config
        self.__source_ref = source_ref

    def create(self) -> Gateway:
        if self.__config.backend == "memory":
            logger.info("Using in-memory gateway")
            return InMemoryGateway(source_ref=self.__source_ref)

        if not self.__config.base_url:
            raise ValueError(
                "Configuration error: 'base_url' must be provided when the gateway backend is 'http'."
            )

        auth = AuthenticatorFactory(self.__config).create_authenticator()
        logger.info(f"Using HTTP gateway at {self.__config.base_url}")
        return HttpGateway(
            http_service=HttpService(
                base_url=self.__config.base_url,
                timeout=self.__config.timeout,
                retries=self.__config.retries,
                backoff=self.__config.backoff,
                authenticator=auth,
            )
        )
