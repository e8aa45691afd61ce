"""
Task parameter container.

Wraps the nested key/value configuration a host hands to an operator and
provides typed getters with the coercions the secrets operator relies on.
"""
import copy
from typing import Any, Dict, Mapping, Optional

from .exceptions import InvalidParameterError


def _deep_merge_default(target: Dict[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill keys missing from target with values from defaults, recursing into mappings."""
    for key, default_value in defaults.items():
        if key not in target:
            target[key] = copy.deepcopy(default_value)
        elif isinstance(target[key], dict) and isinstance(default_value, Mapping):
            _deep_merge_default(target[key], default_value)
    return target


def _as_string(key: str, value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        raise InvalidParameterError(
            f"Expected a string but got {type(value).__name__}", parameter_name=key
        )
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class TaskParams:
    """Read-only view over task parameters with typed access."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        if data is not None and not isinstance(data, Mapping):
            raise InvalidParameterError(
                f"Task parameters must be a mapping, got {type(data).__name__}"
            )
        self._data: Dict[str, Any] = copy.deepcopy(dict(data or {}))

    def __repr__(self) -> str:
        return f"TaskParams({sorted(self._data)})"

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        value = self._data.get(key)
        return default if value is None else value

    def get_optional(self, key: str) -> Optional[str]:
        """Get a string parameter, or None when absent."""
        value = self._data.get(key)
        if value is None:
            return None
        return _as_string(key, value)

    def get_str(self, key: str, default: str) -> str:
        value = self.get_optional(key)
        return default if value is None else value

    def get_nested_or_empty(self, key: str) -> 'TaskParams':
        """Get a nested parameter block, or an empty one when absent."""
        value = self._data.get(key)
        if value is None:
            return TaskParams()
        if not isinstance(value, Mapping):
            raise InvalidParameterError(
                f"Expected a nested object but got {type(value).__name__}", parameter_name=key
            )
        return TaskParams(value)

    def get_map_or_empty(self, key: str) -> Dict[str, str]:
        """Get a string-to-string mapping, coercing values to strings.

        Insertion order of the underlying mapping is preserved.
        """
        value = self._data.get(key)
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise InvalidParameterError(
                f"Expected a key/value object but got {type(value).__name__}", parameter_name=key
            )
        result = {}
        for item_key, item_value in value.items():
            if item_value is None:
                raise InvalidParameterError(
                    f"Value of '{item_key}' must not be null", parameter_name=key
                )
            result[str(item_key)] = _as_string(f"{key}.{item_key}", item_value)
        return result

    def merge_default(self, defaults: 'TaskParams') -> 'TaskParams':
        """Return new params where values of self win and defaults fill the gaps."""
        merged = _deep_merge_default(self.to_dict(), defaults.to_dict())
        return TaskParams(merged)
