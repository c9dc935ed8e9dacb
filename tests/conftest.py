import pytest
from django.test import Client

from tests.factories import UserFactory

PASSWORD = "123456"


@pytest.fixture(autouse=True)
def disable_rate_limit(settings):
    settings.RATELIMIT_ENABLE = False


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def user(db):
    return UserFactory(email="user@nextmail.com", username="user@nextmail.com")


@pytest.fixture
def authenticated_client(client, user):
    client.login(username=user.username, password=PASSWORD)
    return client
