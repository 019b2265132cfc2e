from abc import ABC, abstractmethod
from typing import Any, Dict, List, Set

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    count: int = 0
    results: List[Dict[str, Any]] = Field(default_factory=list)


class SyncResult(BaseModel):
    success: bool
    error: str | None = None


class SynchronizationDto(BaseModel):
    linked_object_id: str | None = None


class CreateResult(BaseModel):
    id: str | None = None
    errors: Dict[str, Any] | None = None


class DuplicateKeyError(Exception):
    """
    Raised by an ObjectStore when a conditional create finds an object with the same unique key.
    """

    def __init__(self, unique_key: str) -> None:
        super().__init__(f"An object with unique key {unique_key} already exists")
        self.unique_key = unique_key


class SearchService(ABC):
    @abstractmethod
    def search(
        self,
        owner_id: str | None,
        search_filter: Dict[str, Any],
        schema_refs: Set[str],
    ) -> SearchResult:
        """
        Searches objects of the given schemas. Filter values are either a string, which has to
        match exactly, or a list of strings of which one has to match.
        """
        ...

    @abstractmethod
    def get_by_id(self, object_id: str) -> Dict[str, Any]: ...


class SyncService(ABC):
    @abstractmethod
    def fetch_and_sync(self, citizen_id: str) -> SyncResult:
        """
        Fetches the aanslagen of a citizen from the tax system and stores them in the host platform.
        """
        ...


class SynchronizationLookup(ABC):
    @abstractmethod
    def find_by_composite_key(
        self, source_ref: str, schema_ref: str, key: str
    ) -> SynchronizationDto: ...


class ObjectStore(ABC):
    @abstractmethod
    def create(
        self,
        schema_ref: str,
        record: Dict[str, Any],
        unique_key: str | None = None,
    ) -> CreateResult:
        """
        Stores a new object. When a unique key is given the create is conditional and raises
        DuplicateKeyError if an object with that key already exists.
        """
        ...


class EventDispatcher(ABC):
    @abstractmethod
    def publish(self, event_type: str, payload: Dict[str, Any]) -> Dict[str, Any] | None:
        """
        Publishes an event. The returned payload may carry an ``Error`` key when a listener failed.
        """
        ...


class Gateway(SearchService, SyncService, SynchronizationLookup, ObjectStore, EventDispatcher, ABC):
    """
    All host platform collaborators behind one object.
    """

    @abstractmethod
    def is_healthy(self) -> bool: ...
