"""Shared fixtures: an app wired to in-memory SQLite and fake external services."""
import httpx
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from tartan_market.config import Settings
from tartan_market.container import Container
from tartan_market.main import create_app
from tartan_market.providers import IdentityProviderABC, StorageProviderABC
from tartan_market.providers.identity.clerk.models import (ClerkEmailAddress,
                                                           ClerkUser)

STORAGE_URL = "https://storage.test/public"


class FakeIdentityProvider(IdentityProviderABC):
    """Accepts tokens of the form `token-<clerk id>`; serves registered users."""

    def __init__(self) -> None:
        self.users: dict[str, ClerkUser] = {}
        self.get_user_calls = 0

    def add_user(self, clerk_id: str, email: str | None) -> None:
        addresses = [ClerkEmailAddress(id="email_1", email_address=email)] if email else []
        self.users[clerk_id] = ClerkUser(
            id=clerk_id, email_addresses=addresses, primary_email_address_id="email_1"
        )

    def verify_session_token(self, token: str):
        if token.startswith("token-"):
            return token.removeprefix("token-")
        return None

    async def get_user(self, clerk_id):
        self.get_user_calls += 1
        if clerk_id not in self.users:
            raise httpx.ConnectError("identity service unreachable")
        return self.users[clerk_id]


class FakeStorageProvider(StorageProviderABC):
    """Keeps objects in memory; filenames listed in `fail_names` fail to upload."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_names: set[str] = set()
        self.upload_calls = 0

    async def upload(self, path, data, content_type):
        self.upload_calls += 1
        if any(path.endswith(name) for name in self.fail_names):
            raise httpx.ConnectError("storage unreachable")
        self.objects[path] = data
        return f"{STORAGE_URL}/{path}"

    async def delete(self, paths):
        for path in paths:
            self.deleted.append(path)
            self.objects.pop(path, None)


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def storage() -> FakeStorageProvider:
    return FakeStorageProvider()


@pytest.fixture
def container(identity, storage):
    container = Container()
    container.settings.override(
        providers.Object(Settings(_env_file=None, database_url="sqlite://"))
    )
    container.identity_provider.override(providers.Object(identity))
    container.storage_provider.override(providers.Object(storage))
    yield container
    container.reset_override()


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


def auth(clerk_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer token-{clerk_id}"}


@pytest.fixture
def sign_up(client, identity):
    """Register an identity and sync its profile; returns the auth headers."""

    def _sign_up(andrew_id: str) -> dict[str, str]:
        clerk_id = f"user_{andrew_id}"
        identity.add_user(clerk_id, f"{andrew_id}@andrew.cmu.edu")
        response = client.post("/users/sync", headers=auth(clerk_id))
        assert response.status_code == 200, response.text
        return auth(clerk_id)

    return _sign_up


@pytest.fixture
def create_item(client):
    """Create a listing through the API and return its id."""

    def _create_item(headers: dict[str, str], item_type: str = "marketplace", **overrides) -> str:
        body = {
            "type": item_type,
            "title": "Hand-knit scarf",
            "description": "Warm wool scarf in tartan colors",
            "price": 25,
            "category": "Clothing",
            "images": ["https://img.test/scarf.png"],
            "tags": ["wool", "winter"],
        }
        if item_type == "marketplace":
            body["condition"] = "New"
        body.update(overrides)
        response = client.post("/items/create", json=body, headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["itemId"]

    return _create_item
