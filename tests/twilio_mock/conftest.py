"""Shared fixtures for the Twilio mock tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import jwt
import pytest
from fastapi.testclient import TestClient

from mock_servers.twilio_mock.app import app
from mock_servers.twilio_mock.db import reset_store

# Any key works: the mock never verifies signatures
SIGNING_KEY = "not-a-real-twilio-api-key-secret-0123456789"


class StubSynthesizer:
    """Returns fixed identifiers so tests can assert exact SIDs."""

    def __init__(self, md5: str = "123", imei: str = "456", cell_phone: str = "4567") -> None:
        self._md5 = md5
        self._imei = imei
        self._cell_phone = cell_phone

    def md5(self) -> str:
        return self._md5

    def imei(self) -> str:
        return self._imei

    def cell_phone(self) -> str:
        return self._cell_phone


class RecordingResolver:
    """DialogResolver stand-in that records construction and calls."""

    instances: List["RecordingResolver"] = []

    def __init__(self, channel_name: str, context: Any) -> None:
        self.channel_name = channel_name
        self.context = context
        self.calls = 0
        RecordingResolver.instances.append(self)

    def call(self) -> Optional[Dict[str, Any]]:
        self.calls += 1
        return None


def make_token(identity: str = "visitor_1", service_sid: str = "sid", algorithm: str = "HS256") -> str:
    claims = {"grants": {"identity": identity, "chat": {"service_sid": service_sid}}}
    key = None if algorithm == "none" else SIGNING_KEY
    return jwt.encode(claims, key, algorithm=algorithm)


@pytest.fixture(autouse=True)
def _reset_store():
    store = reset_store()
    yield store
    reset_store()
    app.dependency_overrides.clear()


@pytest.fixture
def store(_reset_store):
    return _reset_store


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def recording_resolver():
    RecordingResolver.instances = []
    return RecordingResolver


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def stub_synthesizer():
    return StubSynthesizer()
