import logging
from urllib.parse import quote

import requests

from octopus_build_info import constants
from octopus_build_info.config_loader import AppConfig, GitHubContext
from octopus_build_info.models.previous_reference import Found, PreviousReference

logger = logging.getLogger(__name__)


class GitHubConnector:
    def __init__(self, token: str, context: GitHubContext, timeout=None, per_page=None):
        config = AppConfig()
        self.context = context
        self.base_url = f"{context.api_url.rstrip('/')}/repos/{context.owner}/{context.repo}"
        self.timeout = timeout or config.get(constants.REQUEST_TIMEOUT, 30)
        self.per_page = per_page or config.get(constants.GITHUB_PER_PAGE, 100)
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": constants.GITHUB_ACCEPT,
            "Authorization": f"Bearer {token}",
        })

    def _get(self, url, params=None):
        logger.debug(f"GitHub API request GET {url} params={params}")
        response = self.session.request("GET", url, params=params, timeout=self.timeout)
        logger.debug(f"GitHub API response {response.status_code} {response.reason}")
        response.raise_for_status()
        return response

    def resolve_tag(self, tag_name: str) -> str:
        """Map a tag name to the SHA of the commit it points at."""
        response = self._get(f"{self.base_url}/git/ref/tags/{quote(tag_name, safe='')}")
        target = response.json()["object"]

        # annotated tags point at a tag object, which in turn points at the commit
        if target.get("type") == "tag":
            response = self._get(f"{self.base_url}/git/tags/{target['sha']}")
            target = response.json()["object"]

        logger.info(f"Mapped tag {tag_name} to {target['sha']}")
        return target["sha"]

    def compare_commits(self, base: str, head: str) -> list:
        """List the commits reachable from head but not from base, following pagination."""
        url = f"{self.base_url}/compare/{base}...{head}"
        params = {"per_page": self.per_page}
        commits = []
        while url:
            response = self._get(url, params=params)
            commits.extend(response.json().get("commits") or [])
            url = (response.links or {}).get("next", {}).get("url")
            # the next link already carries the query string
            params = None
        return commits

    def get_commits(self, previous_reference: PreviousReference, head: str = None) -> list:
        if not isinstance(previous_reference, Found):
            return []

        head = head or self.context.sha
        try:
            return self.compare_commits(previous_reference.commit_sha, head)
        except (requests.RequestException, KeyError, ValueError) as e:
            logger.warning(f"Failed to compare commits: {e}")
            return []
