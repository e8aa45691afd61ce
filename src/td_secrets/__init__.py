"""
td-secrets: the ``secrets`` operator plugin.

Pushes key/value secrets to a project on a remote workflow server, resolving
the endpoint from task parameters, system configuration or the ``td``
secret namespace and honouring http(s)_proxy settings.
"""

from .operator import (
    OPERATOR_TYPE,
    DEFAULT_ENDPOINT,
    OperatorContext,
    SecretsOperator,
    TaskResult,
    execute,
    first,
)
from .plugin import SecretsOperatorFactory, SecretsPlugin

__all__ = [
    'OPERATOR_TYPE',
    'DEFAULT_ENDPOINT',
    'OperatorContext',
    'SecretsOperator',
    'TaskResult',
    'execute',
    'first',
    'SecretsOperatorFactory',
    'SecretsPlugin'
]
