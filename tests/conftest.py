from unittest.mock import MagicMock

import pytest
import requests

from daietsu_api import ClientConfig, DaietsuClient


def make_response(payload=None, *, status_code=200, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def config():
    return ClientConfig(client_id="client-123", client_secret="s3cret")


@pytest.fixture
def sandbox_config():
    return ClientConfig(
        client_id="client-123",
        client_secret="s3cret",
        sandbox=True,
        timeout_seconds=5,
        webhook_secret="hook-secret",
    )


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response({"result": {"ok": True}})
    return session


@pytest.fixture
def client(config, session):
    return DaietsuClient(config, session=session)


@pytest.fixture
def response_factory():
    return make_response
