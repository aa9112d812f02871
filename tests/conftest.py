import random

import pytest
from fastapi.testclient import TestClient

from resume_tailor.server import app
from resume_tailor.services.cache import ArtifactStore, get_artifact_store
from resume_tailor.services.dispatcher import CredentialPool, GenerationDispatcher
from resume_tailor.services.generator import get_dispatcher

from tests.fakes import FakeRedis, ScriptedTransport


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def store(fake_redis):
    return ArtifactStore(fake_redis, ttl_seconds=3600)


@pytest.fixture
def transport():
    return ScriptedTransport()


@pytest.fixture
def dispatcher(transport):
    return GenerationDispatcher(CredentialPool(["key-one", "key-two"]), transport, rng=random.Random(0))


@pytest.fixture
def client(dispatcher, store):
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_artifact_store] = lambda: store
    app.state.limiter.enabled = False
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    app.state.limiter.enabled = True
