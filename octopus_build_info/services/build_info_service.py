import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from octopus_build_info import constants
from octopus_build_info.config_loader import BuildInfoInputs, GitHubContext
from octopus_build_info.exceptions import ConfigurationError
from octopus_build_info.models.build_record import BuildRecord
from octopus_build_info.models.previous_reference import Found, PreviousReference
from octopus_build_info.models.publish_result import PublishResult
from octopus_build_info.services import build_record_assembler
from octopus_build_info.services.build_record_publisher import BuildRecordPublisher
from octopus_build_info.services.github_connector import GitHubConnector
from octopus_build_info.services.octopus_client import OctopusClient
from octopus_build_info.services.output_writer import OutputWriter, set_output
from octopus_build_info.services.release_correlation_service import ReleaseCorrelationService
from octopus_build_info.util.common_util import normalize_version

logger = logging.getLogger(__name__)


@dataclass
class BuildInfoRunResult:
    previous_reference: PreviousReference
    build_record: BuildRecord
    output_file: Optional[Path] = None
    publish_results: List[PublishResult] = field(default_factory=list)
    publish_files: List[Path] = field(default_factory=list)


class BuildInfoService:
    def __init__(self, inputs: BuildInfoInputs, context: GitHubContext, octopus_client=None, github_connector=None):
        self.inputs = inputs
        self.context = context
        self.octopus_client = octopus_client
        if self.octopus_client is None and inputs.has_octopus_server:
            self.octopus_client = OctopusClient(inputs.octopus_api_key, inputs.octopus_server)
        self.github_connector = github_connector or GitHubConnector(inputs.github_token, context)
        self.writer = OutputWriter(inputs.output_path) if inputs.output_path else None

    def run(self) -> BuildInfoRunResult:
        if self.inputs.push_package_ids:
            self.check_publish_configuration()

        previous_reference = ReleaseCorrelationService(
            self.inputs, self.octopus_client, self.github_connector
        ).resolve_previous_reference()

        # compare the previous release to the current commit
        commits = self.github_connector.get_commits(previous_reference, self.context.sha)
        build_record = build_record_assembler.assemble(self.context, previous_reference, commits)
        result = BuildInfoRunResult(previous_reference=previous_reference, build_record=build_record)

        if self.writer:
            result.output_file = self.writer.write_build_record(build_record)

        if self.inputs.push_package_ids:
            result.publish_results = self.publish(build_record)
            if self.writer:
                result.publish_files = self.writer.write_publish_results(result.publish_results)

        if isinstance(previous_reference, Found):
            set_output(constants.OUTPUT_PREVIOUS_REF, previous_reference.commit_sha)
        if result.output_file:
            set_output(constants.OUTPUT_PATH, result.output_file)
        return result

    def check_publish_configuration(self):
        """Publishing without a version or a server is a fatal misconfiguration."""
        version = normalize_version(self.inputs.push_version, self.inputs.version_tag_prefix)
        if not version:
            raise ConfigurationError("Input required and not supplied: push_version")
        if self.octopus_client is None:
            raise ConfigurationError("Octopus server and API key are required to push build information")
        return version

    def publish(self, build_record: BuildRecord) -> List[PublishResult]:
        version = self.check_publish_configuration()

        space = self.octopus_client.get_space(self.inputs.octopus_space)
        logger.info(f"Pushing build information for {len(self.inputs.push_package_ids)} packages "
                    f"to space {space.name} ({space.id})")
        return BuildRecordPublisher(self.octopus_client).publish_all(
            space.id, self.inputs.push_package_ids, version, build_record, self.inputs.push_overwrite_mode
        )
