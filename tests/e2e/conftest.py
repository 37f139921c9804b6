"""E2E fixtures: the real FastAPI app over a mocked-infrastructure container."""

import pytest
from fastapi.testclient import TestClient

from credo.adapter.mail.smtp import MockMailSender
from credo.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client; entering it runs the app lifespan."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def mail_sender(client, container) -> MockMailSender:
    """The APP-scoped mock sender the app delivers through."""
    return client.portal.call(container.get, MockMailSender)


@pytest.fixture
def outbox(mail_sender):
    return mail_sender.outbox
