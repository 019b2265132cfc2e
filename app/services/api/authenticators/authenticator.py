from abc import ABC, abstractmethod
from typing import Any


class Authenticator(ABC):
    """
    Interface for the ways this service authenticates towards the host platform.
    """

    @abstractmethod
    def get_authentication_header(self) -> str:
        """
        Returns the value for the ``Authorization`` header, or an empty string for none.
        """
        ...

    @abstractmethod
    def get_auth(self) -> Any:
        """
        Returns an object for the ``auth`` parameter of ``requests``, or None.
        """
        ...
