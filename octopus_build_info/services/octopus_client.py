import logging
from typing import Iterator, Optional
from urllib.parse import urljoin

import requests

from octopus_build_info import constants
from octopus_build_info.config_loader import AppConfig
from octopus_build_info.exceptions import OctopusRequestError
from octopus_build_info.models.octopus_resources import Deployment, Environment, Project, Space
from octopus_build_info.services.resource_matcher import FALLBACK_LAST, FALLBACK_NONE, find_match, fuzzy_match

logger = logging.getLogger(__name__)

# cache slot shared by every "no search term" space lookup
_DEFAULT_SPACE_KEY = object()


class OctopusClient:
    """Client for the Octopus Deploy REST API."""

    def __init__(self, api_key: str, server: str, timeout=None):
        self.server = server if server.endswith("/") else f"{server}/"
        self.session = requests.Session()
        self.session.headers.update({constants.OCTOPUS_API_KEY_HEADER: api_key})
        self.timeout = timeout or AppConfig().get(constants.REQUEST_TIMEOUT, 30)
        self.space_cache = {}

    def send_request(self, method, url, params=None, payload=None) -> dict:
        absolute_url = urljoin(self.server, url)
        logger.debug(f"Octopus Deploy API request {method} {absolute_url} params={params}")

        response = self.session.request(method, absolute_url, params=params, json=payload, timeout=self.timeout)
        logger.debug(
            f"Octopus Deploy API response {response.status_code} {response.reason} "
            f"{response.headers.get('content-type')}"
        )
        if not response.ok:
            raise OctopusRequestError(response.reason, response.status_code)
        return response.json()

    def send_resource_request(self, method, space_id, resource, params=None, payload=None) -> dict:
        url = f"/api/{space_id}/{resource}" if space_id else f"/api/{resource}"
        return self.send_request(method, url, params=params, payload=payload)

    def send_page_next_request(self, payload: dict) -> Optional[dict]:
        link = (payload.get("Links") or {}).get(constants.PAGE_NEXT_LINK)
        if not link:
            return None
        return self.send_request("GET", link)

    def get_resource_collection(self, space_id, resource, params=None) -> Iterator[dict]:
        """Yield every item of a collection, fetching the next page only when the current one is used up."""
        payload = self.send_resource_request("GET", space_id, resource, params=params)
        while payload is not None:
            for item in payload.get("Items") or []:
                yield item
            payload = self.send_page_next_request(payload)

    def get_space(self, space_name=None) -> Space:
        """Find a space by name, id or slug; with no name, the server's default space.

        Successful lookups are cached per search term for the lifetime of the client.
        """
        key = space_name or _DEFAULT_SPACE_KEY
        if key in self.space_cache:
            return self.space_cache[key]

        if space_name:
            predicate = lambda item: fuzzy_match(item, space_name)
        else:
            predicate = lambda item: bool(item.get("IsDefault"))
        item = find_match(self.get_resource_collection(None, "spaces"), predicate,
                          constants.RESOURCE_SPACE, space_name or constants.DEFAULT_SPACE_LABEL)

        space = Space.from_api(item)
        self.space_cache[key] = space
        return space

    def get_project(self, space_id, project_name) -> Project:
        item = find_match(self.get_resource_collection(space_id, "projects"),
                          lambda candidate: fuzzy_match(candidate, project_name),
                          constants.RESOURCE_PROJECT, project_name, fallback=FALLBACK_NONE)
        return Project.from_api(item)

    def get_environment_or_default(self, space_id, environment_name) -> Environment:
        # with no match, the last environment in the server's sort order is used
        item = find_match(self.get_resource_collection(space_id, "environments"),
                          lambda candidate: fuzzy_match(candidate, environment_name),
                          constants.RESOURCE_ENVIRONMENT, environment_name, fallback=FALLBACK_LAST)
        return Environment.from_api(item)

    def get_last_deployment(self, space_id, project_id, environment_id) -> Optional[Deployment]:
        payload = self.send_resource_request("GET", space_id, "deployments", params={
            "take": 1,
            "projects": project_id,
            "environments": environment_id,
            "taskState": constants.TASK_STATE_SUCCESS,
        })

        # there should be 0 or 1 deployments in the payload
        items = payload.get("Items") or []
        if payload.get("TotalResults", len(items)) < 1 or not items:
            return None
        return Deployment.from_api(items[0])

    def post_build_information(self, space_id, package_id, version, build_information: dict,
                               overwrite_mode) -> dict:
        payload = {
            "PackageId": package_id,
            "Version": version,
            "OctopusBuildInformation": build_information,
        }
        return self.send_resource_request("POST", space_id, "build-information",
                                          params={"overwriteMode": overwrite_mode}, payload=payload)
