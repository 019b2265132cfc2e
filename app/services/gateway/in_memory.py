import copy
import logging
import threading
from typing import Any, Callable, Dict, List, Set
from uuid import uuid4

from app.services.gateway.gateway import (
    CreateResult,
    DuplicateKeyError,
    Gateway,
    SearchResult,
    SyncResult,
    SynchronizationDto,
)

logger = logging.getLogger(__name__)

EventListener = Callable[[str, Dict[str, Any]], Dict[str, Any] | None]


def get_path(record: Dict[str, Any], path: str) -> Any:
    current: Any = record
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def matches(record: Dict[str, Any], search_filter: Dict[str, Any]) -> bool:
    for path, expected in search_filter.items():
        actual = get_path(record, path)
        if isinstance(expected, (list, set, tuple)):
            if str(actual) not in {str(value) for value in expected}:
                return False
        elif str(actual) != str(expected):
            return False
    return True


class InMemoryGateway(Gateway):
    """
    Host platform kept in memory. Objects are stored per schema, synchronizations per
    (source, schema, key). A create with a unique key is linked as a synchronization of
    the configured source. Used for local runs and tests.
    """

    def __init__(self, source_ref: str | None = None) -> None:
        self.__source_ref = source_ref
        self.__lock = threading.Lock()
        self.__objects: Dict[str, Dict[str, Any]] = {}
        self.__schemas: Dict[str, str] = {}
        self.__synchronizations: Dict[tuple[str, str, str], str] = {}
        self.__unique_keys: Dict[tuple[str, str], str] = {}
        self.__listeners: List[EventListener] = []
        self.__sync_sources: Dict[str, List[Dict[str, Any]]] = {}
        self.events: List[tuple[str, Dict[str, Any]]] = []

    def add_object(self, schema_ref: str, record: Dict[str, Any], object_id: str | None = None) -> str:
        object_id = object_id or str(uuid4())
        with self.__lock:
            self.__objects[object_id] = {**copy.deepcopy(record), "id": object_id}
            self.__schemas[object_id] = schema_ref
        return object_id

    def add_synchronization(self, source_ref: str, schema_ref: str, key: str, object_id: str) -> None:
        with self.__lock:
            self.__synchronizations[(source_ref, schema_ref, key)] = object_id

    def add_listener(self, listener: EventListener) -> None:
        self.__listeners.append(listener)

    def set_source_records(self, schema_ref: str, citizen_id: str, records: List[Dict[str, Any]]) -> None:
        """
        Records that fetch_and_sync will store for the given citizen.
        """
        self.__sync_sources[citizen_id] = [{**r, "_schema": schema_ref} for r in records]

    def search(
        self,
        owner_id: str | None,
        search_filter: Dict[str, Any],
        schema_refs: Set[str],
    ) -> SearchResult:
        with self.__lock:
            results = [
                copy.deepcopy(record)
                for object_id, record in self.__objects.items()
                if self.__schemas[object_id] in schema_refs and matches(record, search_filter)
            ]
        return SearchResult(count=len(results), results=results)

    def get_by_id(self, object_id: str) -> Dict[str, Any]:
        with self.__lock:
            if object_id not in self.__objects:
                raise KeyError(f"Object {object_id} not found")
            return copy.deepcopy(self.__objects[object_id])

    def fetch_and_sync(self, citizen_id: str) -> SyncResult:
        records = self.__sync_sources.pop(citizen_id, [])
        for record in records:
            schema_ref = record.pop("_schema")
            self.add_object(schema_ref, record)
        logger.info(f"Synchronized {len(records)} objects")
        return SyncResult(success=True)

    def find_by_composite_key(self, source_ref: str, schema_ref: str, key: str) -> SynchronizationDto:
        with self.__lock:
            return SynchronizationDto(
                linked_object_id=self.__synchronizations.get((source_ref, schema_ref, key))
            )

    def create(
        self,
        schema_ref: str,
        record: Dict[str, Any],
        unique_key: str | None = None,
    ) -> CreateResult:
        object_id = str(uuid4())
        with self.__lock:
            if unique_key is not None:
                if (schema_ref, unique_key) in self.__unique_keys:
                    raise DuplicateKeyError(unique_key)
                self.__unique_keys[(schema_ref, unique_key)] = object_id
                if self.__source_ref is not None:
                    self.__synchronizations[(self.__source_ref, schema_ref, unique_key)] = object_id
            self.__objects[object_id] = {**copy.deepcopy(record), "id": object_id}
            self.__schemas[object_id] = schema_ref
        return CreateResult(id=object_id)

    def publish(self, event_type: str, payload: Dict[str, Any]) -> Dict[str, Any] | None:
        self.events.append((event_type, copy.deepcopy(payload)))
        response: Dict[str, Any] | None = payload
        for listener in self.__listeners:
            response = listener(event_type, response or {})
        return response

    def is_healthy(self) -> bool:
        return True
