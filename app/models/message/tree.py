from typing import Any, Dict, List

RequestTree = Dict[str, Any]

TEXT_KEY = "#"
ATTRIBUTE_PREFIX = "@"


def text(value: Any) -> Any:
    """
    Returns the text content of a decoded element. Elements carrying attributes are decoded
    as a mapping with the text under ``#``, plain elements are decoded as the scalar itself.
    """
    if isinstance(value, dict):
        return value.get(TEXT_KEY)
    return value


def as_list(value: Any) -> List[Any]:
    """
    Normalizes a possibly repeated element. The wire format collapses a repeated element
    with a single occurrence into the element itself.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class MessageTree:
    """
    Read-only accessor for a decoded message body. Paths are dotted key sequences, keys
    themselves may contain ``:`` and ``-`` (``ns2:body.ns2:BLJ``). A missing key anywhere on
    the path is a normal outcome and results in the default, never in an error.
    """

    def __init__(self, data: RequestTree | None = None) -> None:
        self.__data: RequestTree = data if isinstance(data, dict) else {}

    @property
    def data(self) -> RequestTree:
        return self.__data

    def get(self, path: str, default: Any = None) -> Any:
        current: Any = self.__data
        for key in path.split("."):
            if isinstance(current, list) and len(current) == 1:
                current = current[0]
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]

        return default if current is None else current

    def has(self, path: str) -> bool:
        return self.get(path) is not None

    def get_text(self, path: str, default: Any = None) -> Any:
        value = text(self.get(path))
        if value is None or value == "":
            return default
        return value

    def get_list(self, path: str) -> List[Any]:
        return as_list(self.get(path))

    def subtree(self, path: str) -> "MessageTree":
        value = self.get(path)
        if isinstance(value, list) and len(value) == 1:
            value = value[0]
        return MessageTree(value if isinstance(value, dict) else None)

    def is_empty(self) -> bool:
        return len(self.__data) == 0
