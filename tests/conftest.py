"""Pytest configuration and fixtures for Hue CLIP tests."""

import io
import json
from pathlib import Path

import pytest
import requests
from requests.adapters import BaseAdapter

from core.client import new_client


class FakeBridgeAdapter(BaseAdapter):
    """Transport adapter that answers every request with a canned body.

    Sent requests are recorded on ``self.requests`` with the keyword
    arguments (timeout, verify, ...) they were sent with.
    """

    def __init__(self, body: bytes = b'{"data": [], "errors": []}', status: int = 200):
        super().__init__()
        self.body = body
        self.status = status
        self.requests = []
        self.error = None

    def respond_json(self, payload, status: int = 200):
        self.body = json.dumps(payload).encode('utf-8')
        self.status = status

    def send(self, request, **kwargs):
        self.requests.append((request, kwargs))
        if self.error is not None:
            raise self.error

        response = requests.Response()
        response.status_code = self.status
        response.headers['Content-Type'] = 'application/json'
        response.raw = io.BytesIO(self.body)
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def bridge():
    """A fake bridge adapter."""
    return FakeBridgeAdapter()


@pytest.fixture
def session(bridge):
    """A requests session whose traffic goes to the fake bridge."""
    s = requests.Session()
    s.trust_env = False
    s.mount('https://', bridge)
    s.mount('http://', bridge)
    return s


@pytest.fixture
def client(session):
    """A client for bridge.local with a stored application key."""
    c = new_client('bridge.local', 'secret-key')
    c.set_session(session)
    return c
