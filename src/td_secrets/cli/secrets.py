"""Secrets operator tasks.

Run a ``secrets`` task outside a workflow host, reading proxy settings and
``td`` secrets from the current environment. Configuration errors are
reported with their built-in guidance."""

import json
import os
import sys

import yaml
from invoke import task

from td_secrets.cli import setup_logging
from td_secrets.config.exceptions import ConfigException, InvalidConfigFileError, RemoteCallError


def _handle_config_error(e: ConfigException):
    """Handle configuration errors with built-in guidance."""
    print(e.guidance, file=sys.stderr)
    sys.exit(1)


def _parse_options(option):
    """Turn repeated KEY=VALUE arguments into an ordered dict."""
    options = {}
    for item in option or []:
        if '=' not in item:
            print(f"❌ Option must look like KEY=VALUE: {item}", file=sys.stderr)
            sys.exit(1)
        key, value = item.split('=', 1)
        options[key] = value
    return options


def _load_params(params_file):
    if not params_file:
        return {}
    try:
        with open(params_file, 'r') as f:
            params = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfigFileError(f"Failed to load params: {e}", path=params_file) from e
    if not isinstance(params, dict):
        raise InvalidConfigFileError("Params file must contain a mapping", path=params_file)
    return params


def _build_params(project_id, option, endpoint, params_file):
    params = _load_params(params_file)
    if project_id is not None:
        params['project_id'] = project_id
    if endpoint is not None:
        params['endpoint'] = endpoint
    options = _parse_options(option)
    if options:
        merged = dict(params.get('options') or {})
        merged.update(options)
        params['options'] = merged
    return params


def _load_system_config(system_config):
    from td_secrets.config.system import SystemConfig
    if not system_config:
        return SystemConfig()
    return SystemConfig.from_yaml(system_config)


@task(
    iterable=['option'],
    help={
        'project_id': 'Project id to set secrets on',
        'option': 'Secret to set as KEY=VALUE (repeatable)',
        'endpoint': 'Endpoint override, e.g. https://api.example.com:443',
        'params_file': 'YAML file with task parameters (options, endpoint, project_id, secrets block)',
        'system_config': 'YAML system configuration (config.td.default_endpoint)',
        'dry_run': 'Resolve everything but record calls instead of sending them',
        'debug': 'Enable debug logging'
    }
)
def push(ctx, project_id=None, option=None, endpoint=None, params_file=None,
         system_config=None, dry_run=False, debug=False):
    """
    Push secrets to a project.

    Examples:
        invoke secrets.push --project-id=42 --option a=1 --option b=2
        invoke secrets.push --params-file=task.yml --endpoint=https://digdag.local:65432
        invoke secrets.push --project-id=42 --option a=1 --dry-run
    """
    from td_secrets.client import InMemorySecretsClient
    from td_secrets.operator import execute
    from td_secrets.secrets import EnvSecretStore

    setup_logging(debug)

    env = dict(os.environ)
    recorded = []

    def _recording_client(*args, **kwargs):
        client = InMemorySecretsClient(*args, **kwargs)
        recorded.append(client)
        return client

    try:
        params = _build_params(project_id, option, endpoint, params_file)
        result = execute(
            params,
            EnvSecretStore(env),
            _load_system_config(system_config),
            env,
            client_class=_recording_client if dry_run else None,
        )
    except ConfigException as e:
        _handle_config_error(e)
    except RemoteCallError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if dry_run:
        for client in recorded:
            for call in client.calls:
                print(f"Would set secret '{call.key}' for project '{call.project_id}' at {client.endpoint}")

    print(result.model_dump_json(indent=2))


@task(help={
    'endpoint': 'Endpoint override, e.g. https://api.example.com:443',
    'system_config': 'YAML system configuration (config.td.default_endpoint)',
    'debug': 'Enable debug logging'
})
def show_endpoint(ctx, endpoint=None, system_config=None, debug=False):
    """
    Show the endpoint and proxy a push would use.

    Examples:
        invoke secrets.show-endpoint
        https_proxy=http://proxy:3128 invoke secrets.show-endpoint --endpoint=https://api.example.com
    """
    from td_secrets.client import build_client_config
    from td_secrets.operator import OperatorContext, SecretsOperator
    from td_secrets.config.params import TaskParams
    from td_secrets.secrets import EnvSecretStore

    setup_logging(debug)

    env = dict(os.environ)
    params = {'endpoint': endpoint} if endpoint else {}

    try:
        context = OperatorContext(params=params, secrets=EnvSecretStore(env))
        operator = SecretsOperator(context, env, _load_system_config(system_config))
        resolved = operator.resolve_endpoint(TaskParams(params))
        config = build_client_config(resolved, env)
    except ConfigException as e:
        _handle_config_error(e)

    output = {
        'endpoint': resolved,
        'base_url': config.base_url,
        'proxy_url': config.proxy_url,
        'client': config.model_dump(),
    }
    print(json.dumps(output, indent=2))
