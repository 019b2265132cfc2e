import logging
import time
from typing import Any, Dict
from requests import request, Response
from requests.exceptions import Timeout, ConnectionError
from yarl import URL

from app.services.api.authenticators.authenticator import Authenticator

logger = logging.getLogger(__name__)


class HttpService:
    """
    JSON over HTTP towards the host platform, retrying connection errors and timeouts with an
    exponential backoff.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int,
        retries: int,
        backoff: float,
        authenticator: Authenticator | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.authenticator = authenticator
        self.__timeout = timeout
        self.__retries = max(retries, 1)
        self.__backoff = backoff

    def do_request(
        self,
        method: str,
        sub_route: str | None = None,
        json: Dict[str, Any] | None = None,
        params: Dict[str, Any] | None = None,
    ) -> Response:
        headers = self.make_headers()
        url = self.make_target_url(sub_route, params)

        for attempt in range(self.__retries):
            try:
                logger.info(f"Making HTTP {method} request to {url.with_query(None)}")
                return request(
                    method=method,
                    url=str(url),
                    headers=headers,
                    timeout=self.__timeout,
                    json=json,
                    auth=self.authenticator.get_auth() if self.authenticator else None,
                )
            except (ConnectionError, Timeout):
                logger.warning(f"Failed to make request to {url.with_query(None)} on attempt {attempt}")
                if attempt < self.__retries - 1:
                    logger.info(f"Retrying in {self.__backoff * (2**attempt)} seconds")
                    time.sleep(self.__backoff * (2**attempt))

        logger.error(f"Failed to make request to {url.with_query(None)} after {self.__retries} attempts")
        raise ConnectionError("Failed to make request after too many retries")

    def make_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.authenticator:
            header = self.authenticator.get_authentication_header()
            if header:
                headers["Authorization"] = header

        return headers

    def make_target_url(
        self, sub_route: str | None = None, params: Dict[str, Any] | None = None
    ) -> URL:
        url = self.base_url
        if sub_route:
            url = f"{url}/{sub_route}"

        target = URL(url)
        if params:
            return target.with_query(params)

        return target
