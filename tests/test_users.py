import pytest

PRIVATE_FIELDS = {"id", "clerkId", "favorites"}


def favorites(client, headers) -> list[str]:
    return client.post("/users/current", headers=headers).json()["favorites"]


def test_sync_creates_profile_from_identity(client, identity):
    identity.add_user("user_jdoe", "jdoe@andrew.cmu.edu")
    response = client.post("/users/sync", headers={"Authorization": "Bearer token-user_jdoe"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    user = body["user"]
    assert user["andrewId"] == "jdoe"
    assert user["username"] == "jdoe"
    assert user["email"] == "jdoe@andrew.cmu.edu"
    assert user["avatarUrl"] == "/assets/default-avatar.jpg"
    assert user["starRating"] == -1
    assert user["favorites"] == []
    assert "id" not in user and "clerkId" not in user


def test_sync_twice_returns_same_profile(client, identity):
    identity.add_user("user_jdoe", "jdoe@andrew.cmu.edu")
    headers = {"Authorization": "Bearer token-user_jdoe"}

    first = client.post("/users/sync", headers=headers).json()
    second = client.post("/users/sync", headers=headers).json()

    assert first == second
    assert identity.get_user_calls == 1


def test_sync_fails_when_identity_service_errors(client):
    response = client.post("/users/sync", headers={"Authorization": "Bearer token-user_unknown"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to sync user"}


def test_sync_fails_without_email(client, identity):
    identity.add_user("user_noemail", None)
    response = client.post("/users/sync", headers={"Authorization": "Bearer token-user_noemail"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to sync user"}
    # Nothing was stored; a later sync still goes to the identity service
    identity.add_user("user_noemail", "late@andrew.cmu.edu")
    assert client.post(
        "/users/sync", headers={"Authorization": "Bearer token-user_noemail"}
    ).json()["user"]["andrewId"] == "late"


def test_public_profile_is_redacted(client, sign_up):
    viewer = sign_up("alice")
    owner = sign_up("bob")
    client.post("/users/favorites", json={"itemId": "i1", "action": "add"}, headers=owner)

    response = client.get("/users/bob", headers=viewer)
    assert response.status_code == 200
    profile = response.json()
    assert profile["andrewId"] == "bob"
    assert PRIVATE_FIELDS.isdisjoint(profile)

    # Redacted even when users look at themselves
    assert PRIVATE_FIELDS.isdisjoint(client.get("/users/bob", headers=owner).json())


def test_public_profile_errors(client, sign_up):
    assert client.get("/users/bob").status_code == 401
    response = client.get("/users/bob", headers={"Authorization": "Bearer token-user_ghost"})
    assert response.status_code == 404
    viewer = sign_up("alice")
    response = client.get("/users/nobody", headers=viewer)
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_own_profile_includes_favorites(client, sign_up):
    headers = sign_up("alice")
    client.post("/users/favorites", json={"itemId": "i1", "action": "add"}, headers=headers)

    # The handle in the path is not consulted
    response = client.post("/users/someone-else", headers=headers)
    assert response.status_code == 200
    profile = response.json()
    assert profile["andrewId"] == "alice"
    assert profile["favorites"] == ["i1"]
    assert "id" not in profile and "clerkId" not in profile


def test_favorites_add_then_remove_restores_state(client, sign_up):
    headers = sign_up("alice")
    client.post("/users/favorites", json={"itemId": "keep", "action": "add"}, headers=headers)
    before = favorites(client, headers)

    client.post("/users/favorites", json={"itemId": "i2", "action": "add"}, headers=headers)
    assert favorites(client, headers) == ["keep", "i2"]
    response = client.post(
        "/users/favorites", json={"itemId": "i2", "action": "remove"}, headers=headers
    )
    assert response.json() == {"success": True}
    assert favorites(client, headers) == before


def test_favorites_calls_are_idempotent(client, sign_up):
    headers = sign_up("alice")
    for _ in range(2):
        client.post("/users/favorites", json={"itemId": "i1", "action": "add"}, headers=headers)
    assert favorites(client, headers) == ["i1"]

    for _ in range(2):
        response = client.post(
            "/users/favorites", json={"itemId": "i1", "action": "remove"}, headers=headers
        )
        assert response.status_code == 200
    assert favorites(client, headers) == []


@pytest.mark.parametrize(
    "body",
    [
        {"itemId": "i1", "action": "toggle"},
        {"itemId": "", "action": "add"},
        {"itemId": 7, "action": "add"},
        {"action": "add"},
        ["i1"],
    ],
)
def test_favorites_rejects_invalid_body(client, sign_up, body):
    headers = sign_up("alice")
    response = client.post("/users/favorites", json=body, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_update_profile_merges_fields(client, sign_up):
    headers = sign_up("alice")
    response = client.put(
        "/users/profile",
        json={"shopTitle": "Alice's Knits", "venmoUsername": "alice-v"},
        headers=headers,
    )
    assert response.json() == {"success": True}

    profile = client.post("/users/current", headers=headers).json()
    assert profile["shopTitle"] == "Alice's Knits"
    assert profile["venmoUsername"] == "alice-v"
    assert profile["username"] == "alice"


@pytest.mark.parametrize(
    "body, message",
    [
        ({"andrewId": "eve"}, "Invalid profile field: andrewId"),
        ({"clerkId": "user_eve"}, "Invalid profile field: clerkId"),
        ({"starRating": 5}, "Invalid profile field: starRating"),
        ({"favorites": ["x"]}, "Invalid profile field: favorites"),
        ({"shopTitle": 3}, "Invalid value for shopTitle"),
        ({"username": ""}, "Invalid value for username"),
        ("not an object", "Invalid request body"),
    ],
)
def test_update_profile_rejects_protected_fields(client, sign_up, body, message):
    headers = sign_up("alice")
    response = client.put("/users/profile", json=body, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": message}

    profile = client.post("/users/current", headers=headers).json()
    assert profile["andrewId"] == "alice"
    assert profile["starRating"] == -1


def test_update_profile_requires_profile(client):
    response = client.put(
        "/users/profile", json={"shopTitle": "x"}, headers={"Authorization": "Bearer token-user_ghost"}
    )
    assert response.status_code == 404


def test_sync_handle_collision_is_sync_failure(client, identity):
    identity.add_user("user_cmu", "jdoe@andrew.cmu.edu")
    identity.add_user("user_gmail", "jdoe@gmail.com")
    assert client.post("/users/sync", headers={"Authorization": "Bearer token-user_cmu"}).status_code == 200

    response = client.post("/users/sync", headers={"Authorization": "Bearer token-user_gmail"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to sync user"}
    # The existing owner of the handle is untouched
    profile = client.post("/users/current", headers={"Authorization": "Bearer token-user_cmu"}).json()
    assert profile["email"] == "jdoe@andrew.cmu.edu"
