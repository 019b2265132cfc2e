import logging
from typing import Any, Dict, List, Set

from requests import JSONDecodeError, Response
from requests.exceptions import RequestException

from app.services.api.api_service import HttpService
from app.services.gateway.gateway import (
    CreateResult,
    DuplicateKeyError,
    Gateway,
    SearchResult,
    SyncResult,
    SynchronizationDto,
)

ERR_MSG_FORMAT = "Gateway API error: %s"
logger = logging.getLogger(__name__)


class GatewayApiError(Exception):
    def __init__(self, status_code: int, detail: Any) -> None:
        super().__init__(f"Gateway API returned {status_code}")
        self.status_code = status_code
        self.detail = detail


class HttpGateway(Gateway):
    """
    Host platform reached over its REST API.
    """

    def __init__(self, http_service: HttpService) -> None:
        self.__http = http_service

    def search(
        self,
        owner_id: str | None,
        search_filter: Dict[str, Any],
        schema_refs: Set[str],
    ) -> SearchResult:
        params: Dict[str, Any] = {"_schema": sorted(schema_refs)}
        if owner_id is not None:
            params["_owner"] = owner_id
        for key, value in search_filter.items():
            if isinstance(value, (list, set, tuple)):
                if not value:
                    # An empty query parameter is left out of the url, which would widen the search.
                    logger.info(f"Empty filter for {key}, no objects can match")
                    return SearchResult(count=0, results=[])
                params[f"{key}[]"] = [str(v) for v in value]
            else:
                params[key] = str(value)

        data = self.__json(self.__http.do_request("GET", sub_route="objects", params=params))
        results: List[Dict[str, Any]] = data.get("results", [])
        return SearchResult(count=int(data.get("count", len(results))), results=results)

    def get_by_id(self, object_id: str) -> Dict[str, Any]:
        data = self.__json(self.__http.do_request("GET", sub_route=f"objects/{object_id}"))
        return data

    def fetch_and_sync(self, citizen_id: str) -> SyncResult:
        try:
            response = self.__http.do_request(
                "POST", sub_route="synchronizations/fetch", json={"bsn": citizen_id}
            )
        except RequestException as e:
            logger.warning(f"Synchronization request failed: {e}")
            return SyncResult(success=False, error=str(e))

        if response.status_code >= 400:
            logger.warning(ERR_MSG_FORMAT, response.text)
            return SyncResult(success=False, error=f"status {response.status_code}")

        return SyncResult(success=True)

    def find_by_composite_key(self, source_ref: str, schema_ref: str, key: str) -> SynchronizationDto:
        data = self.__json(
            self.__http.do_request(
                "GET",
                sub_route="synchronizations",
                params={"source": source_ref, "schema": schema_ref, "sourceId": key},
            )
        )
        results = data.get("results", [])
        if not results:
            return SynchronizationDto()
        return SynchronizationDto(linked_object_id=results[0].get("object"))

    def create(
        self,
        schema_ref: str,
        record: Dict[str, Any],
        unique_key: str | None = None,
    ) -> CreateResult:
        body: Dict[str, Any] = {"_schema": schema_ref, **record}
        if unique_key is not None:
            body["_uniqueKey"] = unique_key

        response = self.__http.do_request("POST", sub_route="objects", json=body)
        if response.status_code == 409 and unique_key is not None:
            raise DuplicateKeyError(unique_key)
        if response.status_code in (400, 422):
            data = self.__json(response, allow_error=True)
            return CreateResult(errors=data.get("errors", data))

        data = self.__json(response)
        return CreateResult(id=data.get("id"), errors=data.get("errors") or None)

    def publish(self, event_type: str, payload: Dict[str, Any]) -> Dict[str, Any] | None:
        response = self.__http.do_request(
            "POST", sub_route="events", json={"type": event_type, "data": payload}
        )
        if response.status_code == 204:
            return None
        return self.__json(response, allow_error=True)

    def is_healthy(self) -> bool:
        try:
            response = self.__http.do_request("GET", sub_route="health")
        except RequestException:
            return False
        return response.status_code < 400

    @staticmethod
    def __json(response: Response, allow_error: bool = False) -> Dict[str, Any]:
        if response.status_code >= 400 and not allow_error:
            logger.error(ERR_MSG_FORMAT, response.text)
            raise GatewayApiError(response.status_code, response.text)

        try:
            data = response.json()
        except JSONDecodeError:
            logger.error("Failed to decode JSON response: %s", response.text)
            raise GatewayApiError(response.status_code, response.text)

        if not isinstance(data, dict):
            raise GatewayApiError(response.status_code, data)
        return data
