import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List

from octopus_build_info import constants
from octopus_build_info.config_loader import AppConfig
from octopus_build_info.models.build_record import BuildRecord
from octopus_build_info.models.publish_result import PublishResult
from octopus_build_info.util.common_util import sanitize_package_id

logger = logging.getLogger(__name__)


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path


def set_output(name, value, environ=None):
    """Report a named step result through the GitHub Actions output file."""
    env = os.environ if environ is None else environ
    output_file = env.get("GITHUB_OUTPUT")
    if not output_file:
        logger.info(f"Output {name}={value}")
        return
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


class OutputWriter:
    def __init__(self, output_path):
        config = AppConfig()
        self.output_dir = Path(output_path)
        self.build_information_file = config.get(constants.BUILD_INFORMATION_FILE, "buildInformation.json")
        self.mapped_file_pattern = config.get(constants.BUILD_INFORMATION_MAPPED_FILE,
                                              "buildInformationMapped-{package_id}.json")

    def write_build_record(self, build_record: BuildRecord) -> Path:
        path = self.output_dir / self.build_information_file
        logger.info(f"Writing build information to {path}")
        return write_json(path, build_record.to_octopus())

    def publish_result_path(self, package_id) -> Path:
        return self.output_dir / self.mapped_file_pattern.format(package_id=sanitize_package_id(package_id))

    def publish_result_paths(self, results: List[PublishResult]) -> List[Path]:
        """One distinct file per result, in order.

        Package ids that sanitise to the same name get a numeric suffix, so no
        two responses share a file.
        """
        paths = []
        for result in results:
            path = self.publish_result_path(result.package_id)
            if path in paths:
                base = path
                suffix = 2
                while path in paths:
                    path = base.with_name(f"{base.stem}-{suffix}{base.suffix}")
                    suffix += 1
                logger.warning(f"{result.package_id} sanitises to the same file name as an earlier package, "
                               f"writing its response to {path.name}")
            paths.append(path)
        return paths

    def write_publish_results(self, results: List[PublishResult]) -> List[Path]:
        """Write every publish response; each goes to its own file so they are written in parallel."""
        if not results:
            return []

        paths = self.publish_result_paths(results)
        with ThreadPoolExecutor(max_workers=len(results)) as executor:
            futures = []
            for result, path in zip(results, paths):
                logger.info(f"Writing {result.package_id} build information response to {path}")
                futures.append(executor.submit(write_json, path, result.response))
            # result() re-raises any write error
            return [future.result() for future in futures]
