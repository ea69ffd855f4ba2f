# Main Entry Point
import argparse
import logging
import sys

from dotenv import load_dotenv

from octopus_build_info.config_loader import GitHubContext, load_inputs
from octopus_build_info.exceptions import ConfigurationError
from octopus_build_info.logger import setup_logging
from octopus_build_info.services.build_info_service import BuildInfoService

logger = logging.getLogger(__name__)


def input_parser(argv=None):
    parser = argparse.ArgumentParser(
        description="Collect commits since the last Octopus Deploy release and publish build information"
    )
    parser.add_argument("--github-token", help="Token for the GitHub API (falls back to GITHUB_TOKEN).")
    parser.add_argument("--octopus-api-key", help="Octopus Deploy API key (falls back to OCTOPUS_CLI_API_KEY).")
    parser.add_argument("--octopus-server", help="Octopus Deploy server URL (falls back to OCTOPUS_CLI_SERVER).")
    parser.add_argument("--octopus-environment",
                        help="Environment name, id or slug to look for the previous release (default: Production).")
    parser.add_argument("--octopus-project", help="Project name, id or slug. Commit detection is skipped without it.")
    parser.add_argument("--octopus-space", help="Space name, id or slug (default: the server's default space).")
    parser.add_argument("--output-path", help="Directory to write buildInformation.json and push responses to.")
    parser.add_argument("--push-overwrite-mode",
                        help="FailIfExists, OverwriteExisting or IgnoreIfExists.")
    parser.add_argument("--push-package-ids", help="Whitespace separated package ids to push build information for.")
    parser.add_argument("--push-version", help="Package version to push, e.g. 1.2.3 or refs/tags/v1.2.3.")
    parser.add_argument("--version-tag-prefix", help="Prefix of release tags, e.g. 'v'.")
    return parser.parse_args(argv)


def main(argv=None):
    args = input_parser(argv)
    load_dotenv()
    setup_logging()

    try:
        logger.info("======================= Loading configuration ==========================")
        inputs = load_inputs(args)
        context = GitHubContext.from_env()

        logger.info(f"======================= Build information for {context.repository}@{context.sha} =======================")
        result = BuildInfoService(inputs, context).run()

        logger.info(f"Build information collected with {len(result.build_record.commits)} commits "
                    f"and pushed for {len(result.publish_results)} packages")
        return_code = 0
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return_code = 1
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        logger.error(f"Failed to collect build information: {e}")
        return_code = 1

    logger.info(f"Exit code = {return_code}")
    sys.exit(return_code)


if __name__ == "__main__":
    main()
