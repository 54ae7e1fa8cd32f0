import pytest
from fastapi.testclient import TestClient

from app.tests.fakes import FakeGenerator, scripted_responder


@pytest.fixture
def fake_generator():
    return FakeGenerator(scripted_responder())


@pytest.fixture
def client(fake_generator):
    from app.main import create_app

    with TestClient(create_app(generator=fake_generator)) as test_client:
        yield test_client
