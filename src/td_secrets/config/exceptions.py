"""
Exception classes with built-in guidance for the secrets operator.
"""
import sys
from typing import Optional


class ConfigException(Exception):
    """Base exception for all configuration errors."""
    def __init__(self, message: str, error_type: str = None, parameter_name: str = None):
        super().__init__(message)
        self.error_type = error_type
        self.parameter_name = parameter_name
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            else:
                return executable
        return "unknown command"

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Configuration error: {self}
💡 Check your configuration and try again
"""


class InvalidEndpointError(ConfigException):
    """Raised when an endpoint string cannot be parsed into scheme, host and port."""
    def __init__(self, message: str, endpoint: str):
        self.endpoint = endpoint
        super().__init__(message, error_type="invalid_endpoint", parameter_name="endpoint")

    def _generate_guidance(self):
        command = self._get_current_command()
        return f"""
❌ Invalid endpoint '{self.endpoint}': {self}
💡 Endpoints look like one of the following:
   1. host                      (http, port 80)
   2. host:port                 (http)
   3. https://host              (https, port 443)
   4. https://host:port/path    (path is ignored)
   Fix the 'endpoint' task parameter, the 'config.td.default_endpoint' system setting
   or the 'endpoint' secret in the 'td' namespace, then rerun: {command}
"""


class InvalidParameterError(ConfigException):
    """Raised when a task parameter is missing or has the wrong type."""
    def __init__(self, message: str, parameter_name: str = None):
        super().__init__(message, error_type="invalid_parameter", parameter_name=parameter_name)

    def _generate_guidance(self):
        name = self.parameter_name or '<parameter>'
        return f"""
❌ Invalid task parameter '{name}': {self}
💡 Check the '{name}' value in the task definition or its nested 'secrets' block
"""


class InvalidConfigFileError(ConfigException):
    """Raised when a YAML params or system config file cannot be read or has the wrong shape."""
    def __init__(self, message: str, path: str):
        self.path = str(path)
        super().__init__(message, error_type="invalid_config_file")

    def _generate_guidance(self):
        return f"""
❌ Cannot use config file '{self.path}': {self}
💡 Check that the file exists, is readable and holds a YAML mapping
"""


class RemoteCallError(Exception):
    """Raised when a set-secret call to the remote API fails.

    Not a configuration error: the endpoint was valid but the remote side
    (network, auth or API) rejected the call.
    """
    def __init__(self, message: str, project_id: str = None, endpoint: str = None,
                 key: str = None, status_code: Optional[int] = None):
        self.project_id = project_id
        self.endpoint = endpoint
        self.key = key
        self.status_code = status_code
        super().__init__(
            f"Failed to set secret '{key}' of project '{project_id}' at {endpoint}: {message}"
        )
