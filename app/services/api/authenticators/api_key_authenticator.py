from typing import Any
from app.services.api.authenticators.authenticator import Authenticator


class ApiKeyAuthenticator(Authenticator):
    """
    Sends a static API key, the way the host platform identifies application users.
    """
    def __init__(self, api_key: str) -> None:
        self.__api_key = api_key

    def get_authentication_header(self) -> str:
        return self.__api_key

    def get_auth(self) -> Any:
        return None
