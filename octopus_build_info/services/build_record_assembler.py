import logging
from typing import Iterable

from octopus_build_info import constants
from octopus_build_info.config_loader import GitHubContext
from octopus_build_info.models.build_record import BuildCommit, BuildRecord
from octopus_build_info.models.previous_reference import Found, PreviousReference

logger = logging.getLogger(__name__)


def branch_from_ref(ref):
    if ref and ref.startswith(constants.BRANCH_REF_PREFIX):
        return ref[len(constants.BRANCH_REF_PREFIX):]
    return None


def assemble(context: GitHubContext, previous_reference: PreviousReference, commits: Iterable[dict]) -> BuildRecord:
    """Build the Octopus build information for this workflow run.

    ``commits`` are GitHub compare entries, oldest first.
    """
    build_commits = tuple(
        BuildCommit(id=item["sha"], comment=(item.get("commit") or {}).get("message", ""))
        for item in commits
    )
    if isinstance(previous_reference, Found):
        logger.info(f"Collected {len(build_commits)} commits since {previous_reference.commit_sha}")
    else:
        logger.info(f"Collected {len(build_commits)} commits")

    repository_url = context.repository_url
    return BuildRecord(
        build_environment=constants.BUILD_ENVIRONMENT,
        build_number=str(context.run_id),
        build_url=f"{repository_url}/actions/runs/{context.run_id}",
        branch=branch_from_ref(context.ref),
        vcs_type=constants.VCS_TYPE,
        vcs_root=f"{repository_url}.git",
        vcs_commit_number=context.sha,
        commits=build_commits,
    )
