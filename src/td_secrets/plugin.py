"""
Plugin registration for the host workflow engine.

The host asks the plugin for its operator provider, which returns one
factory per operator type. Factories are registered by type name with the
``operator_type`` decorator.
"""
import logging
from typing import Callable, Dict, List, Mapping, Optional, Type

from .client import SecretsAPIClient
from .config.system import SystemConfig
from .operator import OPERATOR_TYPE, OperatorContext, SecretsOperator

logger = logging.getLogger(__name__)

# Registry: operator type name -> factory class
_operator_factories: Dict[str, Type] = {}


def operator_type(name: str) -> Callable:
    """
    Decorator to register an operator factory under a type name.

    Usage:
        @operator_type("secrets")
        class SecretsOperatorFactory:
            pass
    """
    def decorator(cls: Type) -> Type:
        _operator_factories[name] = cls
        cls.type = name
        return cls
    return decorator


def get_operator_factory_class(name: str) -> Type:
    """Get the factory class registered for an operator type."""
    if name not in _operator_factories:
        available = sorted(_operator_factories)
        raise KeyError(f"Unknown operator type: {name}. Available: {available}")
    return _operator_factories[name]


@operator_type(OPERATOR_TYPE)
class SecretsOperatorFactory:
    """Creates SecretsOperators with the host-injected environment and system config."""

    def __init__(self, env: Mapping[str, str], system_config: Optional[SystemConfig] = None,
                 client_class: Optional[Type[SecretsAPIClient]] = None):
        if env is None:
            raise ValueError("env is required")
        self.env = env
        self.system_config = system_config or SystemConfig()
        self.client_class = client_class

    def new_operator(self, context: OperatorContext) -> SecretsOperator:
        return SecretsOperator(context, self.env, self.system_config, client_class=self.client_class)


class SecretsOperatorProvider:
    """Provides one factory per registered operator type."""

    def __init__(self, env: Mapping[str, str], system_config: Optional[SystemConfig] = None):
        self.env = env
        self.system_config = system_config

    def get(self) -> List:
        return [
            get_operator_factory_class(name)(self.env, self.system_config)
            for name in sorted(_operator_factories)
        ]


class SecretsPlugin:
    """Entry point the host loads."""

    SERVICE_PROVIDERS = {
        'operator': SecretsOperatorProvider,
    }

    def get_service_provider(self, kind: str) -> Optional[Type]:
        return self.SERVICE_PROVIDERS.get(kind)

    def get_operator_factories(self, env: Mapping[str, str],
                               system_config: Optional[SystemConfig] = None) -> List:
        provider = SecretsOperatorProvider(env, system_config)
        factories = provider.get()
        logger.debug(f"Providing operators: {[factory.type for factory in factories]}")
        return factories
