"""
System-wide configuration for the secrets operator.

The host passes one SystemConfig to the operator factory. Values are looked
up by dotted key (e.g. ``config.td.default_endpoint``), either stored flat
or as nested mappings in a YAML file.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .exceptions import InvalidConfigFileError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_KEY = 'config.td.default_endpoint'


class SystemConfig:
    """Optional-string lookup over system configuration."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'SystemConfig':
        """Load system configuration from a YAML file.

        A missing file yields an empty configuration.
        """
        config_path = Path(path)
        if not config_path.exists():
            logger.debug(f"No system config at {config_path}, using empty configuration")
            return cls()

        try:
            with open(config_path, 'r') as f:
                values = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise InvalidConfigFileError(f"Failed to load system config: {e}", path=config_path) from e
        if not isinstance(values, Mapping):
            raise InvalidConfigFileError("System config must contain a mapping", path=config_path)

        logger.debug(f"Loaded system config from {config_path}")
        return cls(values)

    def _lookup(self, key: str) -> Any:
        if key in self._values:
            return self._values[key]

        # Walk nested mappings, allowing partially flattened keys like {'config': {'td.default_endpoint': ...}}
        parts = key.split('.')
        node: Any = self._values
        index = 0
        while index < len(parts):
            if not isinstance(node, Mapping):
                return None
            for end in range(len(parts), index, -1):
                candidate = '.'.join(parts[index:end])
                if candidate in node:
                    node = node[candidate]
                    index = end
                    break
            else:
                return None
        return node

    def get_optional(self, key: str) -> Optional[str]:
        value = self._lookup(key)
        if value is None or isinstance(value, Mapping):
            return None
        return str(value)
