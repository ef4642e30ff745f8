import json
from unittest.mock import MagicMock

import pytest
import requests

from assignee_bot.github.client import GitHubRestClient
from assignee_bot.github.models import GitHubConfig


def build_response(status_code, payload=None, links=None, reason="", body=None):
    """requests.Responseを組み立てる（Linkヘッダ・生のボディも可）"""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if body is not None:
        response._content = body
    else:
        response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    if links:
        response.headers["Link"] = ", ".join(
            f'<{url}>; rel="{rel}"' for rel, url in links.items()
        )
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def config():
    return GitHubConfig(
        token="ghp_configured",
        default_owner="microsoft",
        default_repository="PowerShellForGitHub",
        telemetry_enabled=False,
    )


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(config, session):
    return GitHubRestClient(config, session=session)
