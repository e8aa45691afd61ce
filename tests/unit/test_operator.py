import unittest

from td_secrets import DEFAULT_ENDPOINT, OperatorContext, SecretsOperator, TaskResult, execute, first
from td_secrets.client import InMemorySecretsClient
from td_secrets.config.exceptions import InvalidEndpointError, InvalidParameterError, RemoteCallError
from td_secrets.config.system import SystemConfig
from td_secrets.secrets import MappingSecretStore


class RecordingClient(InMemorySecretsClient):
    """In-memory client that remembers every instance built."""
    instances = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        RecordingClient.instances.append(self)


class FailingClient(RecordingClient):
    """Fails on key 'b'."""

    def set_project_secret(self, project_id, key, value):
        if key == "b":
            raise RemoteCallError("boom", project_id=project_id, endpoint=self.endpoint, key=key)
        super().set_project_secret(project_id, key, value)


def _boom():
    raise AssertionError("supplier must not be called")


class TestFirst(unittest.TestCase):
    """Precedence chain over optional suppliers."""

    def test_first_present_wins_and_short_circuits(self):
        self.assertEqual(first(lambda: "a", _boom), "a")

    def test_skips_absent_values(self):
        self.assertEqual(first(lambda: None, lambda: "b", _boom), "b")

    def test_all_absent(self):
        self.assertIsNone(first(lambda: None, lambda: None, lambda: None))

    def test_no_suppliers(self):
        self.assertIsNone(first())

    def test_empty_string_is_a_value(self):
        self.assertEqual(first(lambda: "", lambda: "x"), "")


class BaseOperatorTest(unittest.TestCase):

    def setUp(self):
        RecordingClient.instances = []

    def run_task(self, params, secrets=None, system_config=None, env=None, project_id=None,
                 client_class=RecordingClient):
        return execute(
            params,
            MappingSecretStore(secrets or {}),
            system_config,
            env or {},
            project_id=project_id,
            client_class=client_class,
        )

    def calls(self):
        return [
            (call.project_id, call.key, call.value)
            for client in RecordingClient.instances
            for call in client.calls
        ]


class TestSecretsOperator(BaseOperatorTest):
    """End-to-end runs against the in-memory client."""

    def test_default_endpoint(self):
        result = self.run_task({"project_id": "42", "options": {"a": "1", "b": "2"}})

        self.assertEqual(result, TaskResult())
        self.assertEqual(self.calls(), [("42", "a", "1"), ("42", "b", "2")])
        self.assertEqual(len(RecordingClient.instances), 1)
        client = RecordingClient.instances[0]
        self.assertEqual(client.endpoint, f"https://{DEFAULT_ENDPOINT}:443")
        self.assertTrue(client.config.use_ssl)

    def test_empty_options_make_no_calls(self):
        result = self.run_task({"project_id": "42", "options": {}})
        self.assertEqual(result, TaskResult())
        self.assertEqual(RecordingClient.instances, [])

    def test_missing_options_make_no_calls(self):
        self.run_task({"project_id": "42"})
        self.assertEqual(RecordingClient.instances, [])

    def test_calls_follow_option_order(self):
        options = {"z": "1", "a": "2", "m": "3"}
        self.run_task({"project_id": "1", "options": options})
        self.assertEqual([key for _, key, _ in self.calls()], ["z", "a", "m"])

    def test_values_are_coerced_to_strings(self):
        self.run_task({"project_id": 7, "options": {"n": 5, "flag": True}})
        self.assertEqual(self.calls(), [("7", "n", "5"), ("7", "flag", "true")])

    def test_ambient_project_id(self):
        self.run_task({"options": {"a": "1"}}, project_id=99)
        self.assertEqual(self.calls(), [("99", "a", "1")])

    def test_explicit_project_id_beats_ambient(self):
        self.run_task({"project_id": "5", "options": {"a": "1"}}, project_id=99)
        self.assertEqual(self.calls(), [("5", "a", "1")])

    def test_missing_project_id(self):
        with self.assertRaises(InvalidParameterError):
            self.run_task({"options": {"a": "1"}})

    def test_nested_secrets_block_provides_defaults(self):
        params = {
            "secrets": {"project_id": "8", "endpoint": "nested:1234", "options": {"a": "nested"}},
            "options": {"b": "top"},
            "endpoint": "top.example.com",
        }
        self.run_task(params)
        client = RecordingClient.instances[0]
        self.assertEqual(client.endpoint, "http://top.example.com:80")
        self.assertEqual(self.calls(), [("8", "b", "top"), ("8", "a", "nested")])

    def test_top_level_value_wins_over_nested(self):
        params = {"secrets": {"options": {"a": "nested"}}, "options": {"a": "top"}, "project_id": "1"}
        self.run_task(params)
        self.assertEqual(self.calls(), [("1", "a", "top")])

    def test_invalid_options_type(self):
        with self.assertRaises(InvalidParameterError):
            self.run_task({"project_id": "1", "options": ["a", "b"]})

    def test_partial_failure_keeps_earlier_calls(self):
        with self.assertRaises(RemoteCallError) as cm:
            self.run_task({"project_id": "42", "options": {"a": "1", "b": "2", "c": "3"}},
                          client_class=FailingClient)

        self.assertEqual(self.calls(), [("42", "a", "1")])
        self.assertEqual(cm.exception.project_id, "42")
        self.assertEqual(cm.exception.key, "b")

    def test_proxy_from_env(self):
        env = {"https_proxy": "http://proxy.local:3128"}
        self.run_task({"project_id": "1", "options": {"a": "1"}}, env=env)
        config = RecordingClient.instances[0].config
        self.assertEqual((config.proxy_host, config.proxy_port, config.proxy_scheme), ("proxy.local", 3128, "http"))


class TestEndpointPrecedence(BaseOperatorTest):
    """Parameter, then system config, then td secret, then the default."""

    OPTIONS = {"project_id": "1", "options": {"a": "1"}}

    def endpoint_used(self):
        return RecordingClient.instances[0].endpoint

    def test_parameter_wins(self):
        self.run_task(
            dict(self.OPTIONS, endpoint="https://param.example.com"),
            secrets={"td.endpoint": "secret.example.com"},
            system_config=SystemConfig({"config.td.default_endpoint": "system.example.com"}),
        )
        self.assertEqual(self.endpoint_used(), "https://param.example.com:443")

    def test_system_config_beats_secret(self):
        self.run_task(
            self.OPTIONS,
            secrets={"td.endpoint": "secret.example.com"},
            system_config=SystemConfig({"config.td.default_endpoint": "system.example.com:8080"}),
        )
        self.assertEqual(self.endpoint_used(), "http://system.example.com:8080")

    def test_secret_used_last(self):
        self.run_task(self.OPTIONS, secrets={"td": {"endpoint": "https://secret.example.com:9443"}})
        self.assertEqual(self.endpoint_used(), "https://secret.example.com:9443")

    def test_secret_not_read_when_parameter_present(self):
        class ExplodingStore(MappingSecretStore):
            def get_secrets(self, namespace):
                provider = super().get_secrets(namespace)
                provider.get_secret_optional = lambda key: _boom()
                return provider

        execute(dict(self.OPTIONS, endpoint="param.example.com"), ExplodingStore(), None, {},
                client_class=RecordingClient)
        self.assertEqual(self.endpoint_used(), "http://param.example.com:80")

    def test_invalid_endpoint_aborts_before_calls(self):
        with self.assertRaises(InvalidEndpointError):
            self.run_task(dict(self.OPTIONS, endpoint="ftp://host"))
        self.assertEqual(RecordingClient.instances, [])

    def test_invalid_endpoint_ignored_without_options(self):
        result = self.run_task({"project_id": "1", "endpoint": "host:notanumber"})
        self.assertEqual(result, TaskResult())
        self.assertEqual(RecordingClient.instances, [])


class TestSecretsOperatorClass(BaseOperatorTest):
    """The operator object the plugin factory hands to the host."""

    def test_resolve_endpoint_default(self):
        context = OperatorContext(params={}, secrets=MappingSecretStore())
        operator = SecretsOperator(context, {}, SystemConfig())
        from td_secrets.config.params import TaskParams
        self.assertEqual(operator.resolve_endpoint(TaskParams()), f"https://{DEFAULT_ENDPOINT}")

    def test_run(self):
        context = OperatorContext(params={"options": {"k": "v"}}, secrets=MappingSecretStore(), project_id="3")
        operator = SecretsOperator(context, {}, SystemConfig(), client_class=RecordingClient)
        self.assertEqual(operator.run(), TaskResult.empty())
        self.assertEqual(self.calls(), [("3", "k", "v")])


if __name__ == '__main__':
    unittest.main()
