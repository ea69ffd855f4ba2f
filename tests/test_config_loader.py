import unittest
from argparse import Namespace

from octopus_build_info.config_loader import AppConfig, GitHubContext, load_inputs, resolve_input
from octopus_build_info.exceptions import ConfigurationError

REQUIRED_ENV = {
    "INPUT_GITHUB_TOKEN": "ghp_input",
    "INPUT_PUSH_OVERWRITE_MODE": "OverwriteExisting",
    "INPUT_VERSION_TAG_PREFIX": "v",
}
FALLBACK_ENV = {
    "OCTOPUS_CLI_API_KEY": "API-env",
    "OCTOPUS_CLI_SERVER": "https://env/",
    "OCTOPUS_ENVIRONMENT": "EnvEnvironment",
    "OCTOPUS_PROJECT": "EnvProject",
    "OCTOPUS_SPACE": "EnvSpace",
}


class TestAppConfig(unittest.TestCase):
    def test_dotted_get(self):
        config = AppConfig()
        self.assertEqual(config.get("github.api_url"), "https://api.github.com")
        self.assertEqual(config.get("defaults.octopus_environment"), "Production")
        self.assertEqual(config.get("github.missing", "fallback"), "fallback")
        self.assertEqual(config.get("github.api_url.deeper", "fallback"), "fallback")


class TestLoadInputs(unittest.TestCase):
    def test_defaults_when_missing(self):
        inputs = load_inputs(environ=dict(REQUIRED_ENV))
        self.assertEqual(inputs.octopus_environment, "Production")
        self.assertIsNone(inputs.octopus_api_key)
        self.assertIsNone(inputs.octopus_server)
        self.assertIsNone(inputs.octopus_project)
        self.assertIsNone(inputs.octopus_space)
        self.assertIsNone(inputs.output_path)
        self.assertEqual(inputs.push_package_ids, ())
        self.assertFalse(inputs.has_octopus_server)

    def test_env_fallback(self):
        inputs = load_inputs(environ={**REQUIRED_ENV, **FALLBACK_ENV})
        self.assertEqual(inputs.octopus_api_key, "API-env")
        self.assertEqual(inputs.octopus_server, "https://env/")
        self.assertEqual(inputs.octopus_environment, "EnvEnvironment")
        self.assertEqual(inputs.octopus_project, "EnvProject")
        self.assertEqual(inputs.octopus_space, "EnvSpace")

    def test_action_input_beats_env(self):
        environ = {**REQUIRED_ENV, **FALLBACK_ENV, "INPUT_OCTOPUS_PROJECT": "InputProject",
                   "INPUT_OCTOPUS_ENVIRONMENT": "InputEnvironment"}
        inputs = load_inputs(environ=environ)
        self.assertEqual(inputs.octopus_project, "InputProject")
        self.assertEqual(inputs.octopus_environment, "InputEnvironment")
        self.assertEqual(inputs.octopus_space, "EnvSpace")

    def test_cli_argument_beats_action_input(self):
        environ = {**REQUIRED_ENV, "INPUT_OCTOPUS_SPACE": "InputSpace"}
        args = Namespace(octopus_space="CliSpace", github_token="ghp_cli")
        inputs = load_inputs(args, environ=environ)
        self.assertEqual(inputs.octopus_space, "CliSpace")
        self.assertEqual(inputs.github_token, "ghp_cli")

    def test_empty_values_count_as_unset(self):
        environ = {**REQUIRED_ENV, "INPUT_OCTOPUS_ENVIRONMENT": "", "OCTOPUS_ENVIRONMENT": "  "}
        self.assertEqual(load_inputs(environ=environ).octopus_environment, "Production")

    def test_github_token_env_fallback(self):
        environ = {**REQUIRED_ENV, "GITHUB_TOKEN": "ghp_env"}
        del environ["INPUT_GITHUB_TOKEN"]
        self.assertEqual(load_inputs(environ=environ).github_token, "ghp_env")

    def test_missing_required_inputs(self):
        with self.assertRaises(ConfigurationError) as cm:
            load_inputs(environ={"INPUT_GITHUB_TOKEN": "ghp"})
        self.assertIn("push_overwrite_mode", str(cm.exception))
        self.assertIn("version_tag_prefix", str(cm.exception))
        self.assertNotIn("github_token", str(cm.exception))

    def test_invalid_overwrite_mode(self):
        environ = {**REQUIRED_ENV, "INPUT_PUSH_OVERWRITE_MODE": "Replace"}
        with self.assertRaises(ConfigurationError) as cm:
            load_inputs(environ=environ)
        self.assertIn("Replace", str(cm.exception))

    def test_package_ids_are_split_in_order(self):
        environ = {**REQUIRED_ENV, **FALLBACK_ENV, "INPUT_PUSH_PACKAGE_IDS": "Billing.Worker Billing.Api Billing.Worker",
                   "INPUT_PUSH_VERSION": "refs/tags/v2.0.0"}
        inputs = load_inputs(environ=environ)
        self.assertEqual(inputs.push_package_ids, ("Billing.Worker", "Billing.Api"))
        self.assertEqual(inputs.push_version, "refs/tags/v2.0.0")

    def test_package_ids_without_version(self):
        environ = {**REQUIRED_ENV, **FALLBACK_ENV, "INPUT_PUSH_PACKAGE_IDS": "Billing.Api"}
        with self.assertRaises(ConfigurationError) as cm:
            load_inputs(environ=environ)
        self.assertIn("push_version", str(cm.exception))

    def test_package_ids_without_server(self):
        environ = {**REQUIRED_ENV, "INPUT_PUSH_PACKAGE_IDS": "Billing.Api", "INPUT_PUSH_VERSION": "2.0.0"}
        with self.assertRaises(ConfigurationError):
            load_inputs(environ=environ)

    def test_resolve_input_precedence(self):
        environ = {"INPUT_OCTOPUS_SPACE": "input", "OCTOPUS_SPACE": "env"}
        defaults = {"octopus_space": "default"}
        self.assertEqual(resolve_input("octopus_space", "octopus_space", "OCTOPUS_SPACE", environ=environ,
                                       defaults=defaults), "input")
        self.assertEqual(resolve_input("octopus_space", "octopus_space", "OCTOPUS_SPACE",
                                       environ={"OCTOPUS_SPACE": "env"}, defaults=defaults), "env")
        self.assertEqual(resolve_input("octopus_space", "octopus_space", "OCTOPUS_SPACE", environ={},
                                       defaults=defaults), "default")


class TestGitHubContext(unittest.TestCase):
    def test_from_env(self):
        context = GitHubContext.from_env({
            "GITHUB_REPOSITORY": "acme/billing",
            "GITHUB_SHA": "abc123",
            "GITHUB_RUN_ID": "42",
            "GITHUB_REF": "refs/heads/main",
        })
        self.assertEqual(context.owner, "acme")
        self.assertEqual(context.repo, "billing")
        self.assertEqual(context.server_url, "https://github.com")
        self.assertEqual(context.api_url, "https://api.github.com")
        self.assertEqual(context.repository_url, "https://github.com/acme/billing")

    def test_enterprise_urls(self):
        context = GitHubContext.from_env({
            "GITHUB_REPOSITORY": "acme/billing",
            "GITHUB_SHA": "abc123",
            "GITHUB_RUN_ID": "42",
            "GITHUB_SERVER_URL": "https://git.acme.test/",
            "GITHUB_API_URL": "https://git.acme.test/api/v3",
        })
        self.assertEqual(context.repository_url, "https://git.acme.test/acme/billing")
        self.assertEqual(context.api_url, "https://git.acme.test/api/v3")
        self.assertIsNone(context.ref)

    def test_missing_environment(self):
        with self.assertRaises(ConfigurationError) as cm:
            GitHubContext.from_env({"GITHUB_REPOSITORY": "acme/billing"})
        self.assertIn("GITHUB_SHA", str(cm.exception))
        self.assertIn("GITHUB_RUN_ID", str(cm.exception))

    def test_malformed_repository(self):
        with self.assertRaises(ConfigurationError):
            GitHubContext.from_env({"GITHUB_REPOSITORY": "billing", "GITHUB_SHA": "a", "GITHUB_RUN_ID": "1"})


if __name__ == "__main__":
    unittest.main()
