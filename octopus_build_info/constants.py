from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
CONFIG_FILENAME = str(PACKAGE_DIR / "config.yaml")
LOGGING_CONFIG_FILENAME = str(PACKAGE_DIR / "logging.yaml")

# config.yaml keys
DEFAULTS = "defaults"
GITHUB_API_URL = "github.api_url"
GITHUB_SERVER_URL = "github.server_url"
GITHUB_PER_PAGE = "github.per_page"
REQUEST_TIMEOUT = "http.timeout_seconds"
BUILD_INFORMATION_FILE = "output.build_information_file"
BUILD_INFORMATION_MAPPED_FILE = "output.build_information_mapped_file"

# Configuration fields: (field name, action input name, environment fallback)
INPUT_FIELDS = [
    ("github_token", "github_token", "GITHUB_TOKEN"),
    ("octopus_api_key", "octopus_api_key", "OCTOPUS_CLI_API_KEY"),
    ("octopus_server", "octopus_server", "OCTOPUS_CLI_SERVER"),
    ("octopus_environment", "octopus_environment", "OCTOPUS_ENVIRONMENT"),
    ("octopus_project", "octopus_project", "OCTOPUS_PROJECT"),
    ("octopus_space", "octopus_space", "OCTOPUS_SPACE"),
    ("output_path", "output_path", None),
    ("push_overwrite_mode", "push_overwrite_mode", None),
    ("push_package_ids", "push_package_ids", None),
    ("push_version", "push_version", None),
    ("version_tag_prefix", "version_tag_prefix", None),
]
REQUIRED_INPUTS = ["github_token", "push_overwrite_mode", "version_tag_prefix"]
OVERWRITE_MODES = ["FailIfExists", "OverwriteExisting", "IgnoreIfExists"]

# Octopus Deploy API
OCTOPUS_API_KEY_HEADER = "X-Octopus-ApiKey"
PAGE_NEXT_LINK = "Page.Next"
TASK_STATE_SUCCESS = "Success"
DEFAULT_SPACE_LABEL = "Default"

# Octopus resource kinds, used in lookup errors
RESOURCE_SPACE = "space"
RESOURCE_PROJECT = "project"
RESOURCE_ENVIRONMENT = "environment"

# Build information
BUILD_ENVIRONMENT = "GitHub Actions"
VCS_TYPE = "Git"
BRANCH_REF_PREFIX = "refs/heads/"
TAG_REF_PREFIX = "refs/tags/"
GITHUB_ACCEPT = "application/vnd.github+json"

# Step outputs
OUTPUT_PREVIOUS_REF = "previous_ref"
OUTPUT_PATH = "path"
