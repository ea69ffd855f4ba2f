import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

import yaml

from octopus_build_info import constants
from octopus_build_info.exceptions import ConfigurationError
from octopus_build_info.util.common_util import split_package_ids

logger = logging.getLogger(__name__)


class AppConfig:
    _instance = None  # Singleton instance

    def __new__(cls, config_path=constants.CONFIG_FILENAME):
        if cls._instance is None:
            cls._instance = super(AppConfig, cls).__new__(cls)
            cls._instance._load_config(config_path)
        return cls._instance

    def _load_config(self, config_path):
        logger.debug(f"Loading configuration from {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as file:
            self.config = yaml.safe_load(file) or {}

    def get(self, key_path, default=None):
        """Fetch nested keys using dot notation, e.g. get('github.api_url')"""
        keys = key_path.split(".")
        value = self.config
        for key in keys:
            value = value.get(key, None) if isinstance(value, dict) else None
            if value is None:
                return default
        return value


@dataclass(frozen=True)
class BuildInfoInputs:
    """Run configuration, resolved once at startup."""
    github_token: str
    push_overwrite_mode: str
    version_tag_prefix: str
    octopus_api_key: Optional[str] = None
    octopus_server: Optional[str] = None
    octopus_environment: Optional[str] = None
    octopus_project: Optional[str] = None
    octopus_space: Optional[str] = None
    output_path: Optional[str] = None
    push_package_ids: Tuple[str, ...] = ()
    push_version: Optional[str] = None

    @property
    def has_octopus_server(self) -> bool:
        return bool(self.octopus_server and self.octopus_api_key)


@dataclass(frozen=True)
class GitHubContext:
    """The workflow run this tool is executing in."""
    repository: str
    sha: str
    run_id: str
    ref: Optional[str] = None
    server_url: str = "https://github.com"
    api_url: str = "https://api.github.com"

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[1]

    @property
    def repository_url(self) -> str:
        return f"{self.server_url.rstrip('/')}/{self.repository}"

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        config = AppConfig()

        missing = [name for name in ("GITHUB_REPOSITORY", "GITHUB_SHA", "GITHUB_RUN_ID") if not env.get(name)]
        if missing:
            raise ConfigurationError(f"GitHub environment variables not set: {', '.join(missing)}")

        repository = env["GITHUB_REPOSITORY"]
        if "/" not in repository:
            raise ConfigurationError(f"GITHUB_REPOSITORY must look like 'owner/repo', got '{repository}'")

        return cls(
            repository=repository,
            sha=env["GITHUB_SHA"],
            run_id=str(env["GITHUB_RUN_ID"]),
            ref=env.get("GITHUB_REF") or None,
            server_url=env.get("GITHUB_SERVER_URL") or config.get(constants.GITHUB_SERVER_URL),
            api_url=env.get("GITHUB_API_URL") or config.get(constants.GITHUB_API_URL),
        )


def _first_set(*candidates):
    for value in candidates:
        if isinstance(value, str):
            value = value.strip()
        if value:
            return value
    return None


def resolve_input(field, input_name, env_name, args=None, environ=None, defaults=None):
    """Resolve one field: explicit input, then environment fallback, then default."""
    env = os.environ if environ is None else environ
    explicit = _first_set(
        getattr(args, field, None) if args is not None else None,
        env.get(f"INPUT_{input_name.upper()}"),
    )
    fallback = env.get(env_name) if env_name else None
    default = (defaults or {}).get(field)
    return _first_set(explicit, fallback, default)


def load_inputs(args=None, environ=None) -> BuildInfoInputs:
    """Build the immutable run configuration.

    Each field is taken from the CLI flag or the GitHub Actions ``INPUT_*``
    variable, then from its environment fallback, then from the ``defaults``
    table in config.yaml. Empty strings count as unset.
    """
    defaults = AppConfig().get(constants.DEFAULTS, {})
    values = {
        field: resolve_input(field, input_name, env_name, args=args, environ=environ, defaults=defaults)
        for field, input_name, env_name in constants.INPUT_FIELDS
    }

    missing = [field for field in constants.REQUIRED_INPUTS if not values[field]]
    if missing:
        raise ConfigurationError(f"Input required and not supplied: {', '.join(missing)}")

    if values["push_overwrite_mode"] not in constants.OVERWRITE_MODES:
        raise ConfigurationError(
            f"Invalid push_overwrite_mode '{values['push_overwrite_mode']}', "
            f"expected one of {', '.join(constants.OVERWRITE_MODES)}"
        )

    values["push_package_ids"] = split_package_ids(values["push_package_ids"])
    if values["push_package_ids"]:
        if not values["push_version"]:
            raise ConfigurationError("Input required and not supplied: push_version")
        if not (values["octopus_server"] and values["octopus_api_key"]):
            raise ConfigurationError("Octopus server and API key are required to push build information")

    inputs = BuildInfoInputs(**values)
    logger.debug(
        f"Resolved inputs: server={inputs.octopus_server}, space={inputs.octopus_space}, "
        f"project={inputs.octopus_project}, environment={inputs.octopus_environment}, "
        f"packages={list(inputs.push_package_ids)}"
    )
    return inputs
