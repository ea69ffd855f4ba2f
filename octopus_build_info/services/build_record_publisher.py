import logging
from typing import List

from octopus_build_info.exceptions import ConfigurationError
from octopus_build_info.models.build_record import BuildRecord
from octopus_build_info.models.publish_result import PublishResult

logger = logging.getLogger(__name__)


class BuildRecordPublisher:
    def __init__(self, octopus_client):
        self.octopus_client = octopus_client

    def publish(self, space_id, package_id, version, build_record: BuildRecord, overwrite_mode) -> PublishResult:
        logger.info(f"Pushing build information for {package_id} {version} ({overwrite_mode})")
        response = self.octopus_client.post_build_information(
            space_id, package_id, version, build_record.to_octopus(), overwrite_mode
        )
        logger.debug(f"Build information response for {package_id}: {response}")
        return PublishResult(package_id=package_id, version=version, response=response)

    def publish_all(self, space_id, package_ids, version, build_record: BuildRecord,
                    overwrite_mode) -> List[PublishResult]:
        """Push one package at a time, in the configured order. Failures propagate."""
        package_ids = list(package_ids)
        if package_ids and not version:
            raise ConfigurationError("Input required and not supplied: push_version")

        return [
            self.publish(space_id, package_id, version, build_record, overwrite_mode)
            for package_id in package_ids
        ]
