import os
import json
from urllib.parse import urlsplit
from unittest.mock import MagicMock

import requests

from octopus_build_info.config_loader import BuildInfoInputs, GitHubContext
from tests.constants import *


def read_test_data(data_type):
    with open(os.path.join(os.path.dirname(__file__) + TEST_DATA_PATH, data_type + ".json")) as f:
        return json.load(f)


def make_inputs(**overrides):
    values = dict(
        github_token="ghp_test",
        push_overwrite_mode="OverwriteExisting",
        version_tag_prefix="v",
        octopus_api_key=OCTOPUS_API_KEY,
        octopus_server=OCTOPUS_SERVER,
        octopus_environment="Production",
        octopus_project="Billing API",
        octopus_space=None,
        output_path=None,
        push_package_ids=(),
        push_version=None,
    )
    values.update(overrides)
    return BuildInfoInputs(**values)


def make_context(**overrides):
    values = dict(
        repository=REPOSITORY,
        sha=HEAD_SHA,
        run_id=RUN_ID,
        ref="refs/heads/main",
        server_url="https://github.com",
        api_url=GITHUB_API,
    )
    values.update(overrides)
    return GitHubContext(**values)


def fake_response(data=None, status_code=200, reason="OK", links=None):
    # Build a fake response; raise_for_status() only raises for error codes
    fake_resp = MagicMock()
    fake_resp.status_code = status_code
    fake_resp.ok = status_code < 400
    fake_resp.reason = reason
    fake_resp.headers = {"content-type": "application/json"}
    fake_resp.links = links or {}
    fake_resp.json.return_value = data if data is not None else {}
    fake_resp.text = json.dumps(data) if data is not None else ""
    if status_code >= 400:
        fake_resp.raise_for_status = MagicMock(side_effect=requests.HTTPError(f"{status_code} {reason}"))
    else:
        fake_resp.raise_for_status = MagicMock()
    return fake_resp


def route_key(url):
    parts = urlsplit(url)
    return f"{parts.path}?{parts.query}" if parts.query else parts.path


def mock_request(*args, routes=None, **kwargs):
    """Answer requests.Session.request from a {path[?query]: response} table."""
    url = args[1]
    response = (routes or {}).get(route_key(url))
    if response is None:
        return fake_response(status_code=404, reason="Not Found")
    # a prepared response is itself callable, so check for it first
    if isinstance(response, MagicMock):
        return response
    if callable(response):
        return response(*args, **kwargs)
    return fake_response(response)
