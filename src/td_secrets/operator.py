"""
The ``secrets`` operator.

Pushes the key/value pairs of the ``options`` parameter to a project's
secrets on the remote workflow server. Parameters may also be given in a
nested ``secrets`` block, which acts as defaults for the top-level ones.

Endpoint precedence:
    1. ``endpoint`` task parameter
    2. ``config.td.default_endpoint`` system setting
    3. ``endpoint`` secret in the ``td`` namespace
    4. https://api.treasuredata.com
"""
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from .client import SecretsAPIClient, build_client
from .config.exceptions import InvalidParameterError
from .config.params import TaskParams
from .config.system import SystemConfig, DEFAULT_ENDPOINT_KEY
from .secrets import SecretStore, TD_NAMESPACE

logger = logging.getLogger(__name__)

T = TypeVar('T')

OPERATOR_TYPE = 'secrets'
DEFAULT_ENDPOINT = 'api.treasuredata.com'
DEFAULT_ENDPOINT_URL = f'https://{DEFAULT_ENDPOINT}'


def first(*suppliers: Callable[[], Optional[T]]) -> Optional[T]:
    """Return the first non-None value produced by suppliers, in order.

    Suppliers after the first hit are never called.
    """
    for supplier in suppliers:
        value = supplier()
        if value is not None:
            return value
    return None


class TaskResult(BaseModel):
    """Result handed back to the host after a task completes."""
    store_params: Dict[str, Any] = Field(default_factory=dict)
    export_params: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> 'TaskResult':
        return cls()


class OperatorContext(BaseModel):
    """Per-task inputs supplied by the host."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    params: Dict[str, Any] = Field(default_factory=dict)
    secrets: SecretStore
    project_id: Optional[Union[int, str]] = None


class SecretsOperator:
    """Runs one ``secrets`` task."""

    def __init__(self, context: OperatorContext, env: Mapping[str, str], system_config: SystemConfig,
                 client_class: Optional[Type[SecretsAPIClient]] = None):
        self.context = context
        self.env = env
        self.system_config = system_config
        self.client_class = client_class

    def _resolve_project_id(self, params: TaskParams) -> str:
        ambient = self.context.project_id
        project_id = params.get_str('project_id', '' if ambient is None else str(ambient))
        if not project_id.strip():
            raise InvalidParameterError(
                "No project id given and the task has no ambient project", parameter_name='project_id'
            )
        return project_id.strip()

    def resolve_endpoint(self, params: TaskParams) -> str:
        secrets = self.context.secrets.get_secrets(TD_NAMESPACE)
        endpoint = first(
            lambda: params.get_optional('endpoint'),
            lambda: self.system_config.get_optional(DEFAULT_ENDPOINT_KEY),
            lambda: secrets.get_secret_optional('endpoint'),
        )
        return DEFAULT_ENDPOINT_URL if endpoint is None else endpoint

    def run(self) -> TaskResult:
        raw = TaskParams(self.context.params)
        params = raw.merge_default(raw.get_nested_or_empty('secrets'))

        project_id = self._resolve_project_id(params)
        endpoint = self.resolve_endpoint(params)
        options = params.get_map_or_empty('options')

        logger.info(f"Set project '{project_id}' secrets for endpoint: {endpoint}... {sorted(options)}")

        if options:
            with build_client(endpoint, self.env, self.client_class) as client:
                for key, value in options.items():
                    client.set_project_secret(project_id, key, value)
            logger.info(f"Set {len(options)} secret(s) for project '{project_id}'")

        return TaskResult.empty()


def execute(params: Mapping[str, Any], secrets: SecretStore, system_config: Optional[SystemConfig],
            env: Mapping[str, str], project_id: Optional[Union[int, str]] = None,
            client_class: Optional[Type[SecretsAPIClient]] = None) -> TaskResult:
    """Run a ``secrets`` task with explicitly passed collaborators.

    Args:
        params: Task parameters
        secrets: Secret store; the ``td`` namespace is consulted
        system_config: System-wide configuration (None for empty)
        env: Environment variables used for proxy detection
        project_id: Ambient project id of the invoking workflow
        client_class: Client implementation, SecretsClient by default

    Raises:
        InvalidEndpointError: endpoint is malformed; no call was made
        InvalidParameterError: a parameter has the wrong type or no project id is known
        RemoteCallError: a set-secret call failed; earlier calls are kept
    """
    context = OperatorContext(params=dict(params or {}), secrets=secrets, project_id=project_id)
    operator = SecretsOperator(context, env, system_config or SystemConfig(), client_class=client_class)
    return operator.run()
