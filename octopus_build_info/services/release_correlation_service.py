import logging
from typing import Iterable, Iterator, List, Optional

from octopus_build_info.config_loader import BuildInfoInputs
from octopus_build_info.models.octopus_resources import BuildInformationEntry, Change
from octopus_build_info.models.previous_reference import Found, NotFound, PreviousReference

logger = logging.getLogger(__name__)


def iter_build_information(changes: List[Change]) -> Iterator[BuildInformationEntry]:
    """Newest change first; entries of one change in their original order."""
    for change in reversed(changes):
        yield from change.build_information


def find_commit_number(entries: Iterable[BuildInformationEntry], package_ids=None) -> Optional[str]:
    """First commit number, restricted to package_ids when given."""
    for entry in entries:
        if not entry.vcs_commit_number:
            continue
        if package_ids is None or entry.package_id in package_ids:
            return entry.vcs_commit_number
    return None


def find_last_version(changes: List[Change]) -> Optional[str]:
    version = None
    for change in changes:
        if change.version:
            version = change.version
    return version


class ReleaseCorrelationService:
    """Works out which commit the last successful Octopus deployment was built from.

    Walks space, project, environment and latest deployment, then prefers build
    information commit numbers (for our packages first, then any package) and
    finally a git tag named after the deployed version. Every step that cannot
    continue logs why and yields ``NotFound``; nothing here aborts the run.
    """

    def __init__(self, inputs: BuildInfoInputs, octopus_client, github_connector):
        self.inputs = inputs
        self.octopus_client = octopus_client
        self.github_connector = github_connector

    def _step(self, failure_message, func, *args):
        try:
            return func(*args)
        except Exception as e:
            logger.warning(f"{failure_message}: {e}")
            return NotFound(f"{failure_message}: {e}")

    def resolve_previous_reference(self) -> PreviousReference:
        # without a project name, give up immediately
        if not self.inputs.octopus_project:
            logger.info("Octopus project name undefined; skipping commits detection")
            return NotFound("no project configured")

        if self.octopus_client is None:
            logger.warning("Octopus server or API key undefined; skipping commits detection")
            return NotFound("no Octopus server configured")

        client = self.octopus_client

        space = self._step("Failed to fetch Octopus space", client.get_space, self.inputs.octopus_space)
        if isinstance(space, NotFound):
            return space
        logger.info(f"Detected Octopus space {space.name} ({space.id})")

        project = self._step("Failed to fetch Octopus project", client.get_project,
                             space.id, self.inputs.octopus_project)
        if isinstance(project, NotFound):
            return project
        logger.info(f"Detected Octopus project {project.name} ({project.id})")

        environment = self._step("Failed to fetch Octopus environments", client.get_environment_or_default,
                                 space.id, self.inputs.octopus_environment)
        if isinstance(environment, NotFound):
            return environment
        logger.info(f"Detected Octopus environment {environment.name} ({environment.id})")

        deployment = self._step("Failed to fetch previous Octopus deployment", client.get_last_deployment,
                                space.id, project.id, environment.id)
        if isinstance(deployment, NotFound):
            return deployment
        if deployment is None:
            logger.info("No previous Octopus deployment found")
            return NotFound("no previous deployment")
        logger.info(f"Detected latest Octopus deployment {deployment.id} @ {deployment.created}")

        if not deployment.changes:
            logger.warning("Deployment does not contain any changes")
            return NotFound("deployment has no changes")

        return self._from_changes(deployment.changes)

    def _from_changes(self, changes: List[Change]) -> PreviousReference:
        commit = find_commit_number(iter_build_information(changes), self.inputs.push_package_ids)
        if commit:
            logger.info(f"Detected previous build of a pushed package @ {commit}")
            return Found(commit)

        commit = find_commit_number(iter_build_information(changes))
        if commit:
            logger.info(f"Detected previous build @ {commit}")
            return Found(commit)

        # use the version number to probe for a matching tag
        version = find_last_version(changes)
        if not version:
            logger.warning("Deployment does not contain any build information")
            return NotFound("deployment has no build information or version")

        tag = f"{self.inputs.version_tag_prefix}{version}"
        logger.info(f"Detected previous version {version}, looking for tag {tag}...")
        sha = self._step("Failed to fetch ref", self.github_connector.resolve_tag, tag)
        if isinstance(sha, NotFound):
            return sha
        return Found(sha)
