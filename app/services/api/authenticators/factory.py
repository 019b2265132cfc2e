from app.config import ConfigGateway
from app.services.api.authenticators.authenticator import Authenticator
from app.services.api.authenticators.null_authenticator import NullAuthenticator
from app.services.api.authenticators.api_key_authenticator import ApiKeyAuthenticator


class AuthenticatorFactory:
    def __init__(self, config: ConfigGateway) -> None:
        self.__config = config

    def create_authenticator(self) -> Authenticator:
        match self.__config.authentication:
            case "off":
                return NullAuthenticator()
            case "api_key":
                if not self.__config.api_key:
                    raise ValueError(
                        "api_key cannot be empty when authentication is set to 'api_key', please fix in app.conf"
                    )
                return ApiKeyAuthenticator(api_key=self.__config.api_key)
            case _:
                raise ValueError(
                    "incorrect value for authenticator, supported types are 'api_key' or 'off'. Please fix in app.conf"
                )
