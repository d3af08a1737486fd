"""Profile endpoints."""

from __future__ import annotations


def _profile(**overrides):
    payload = {"userName": "alice", "dept": "Computer Science", "grade": 3, "links": ["https://git.example/alice"]}
    payload.update(overrides)
    return payload


def test_create_and_get_profile(login_client, client):
    test_client, user_id = login_client("alice@cau.ac.kr")

    response = test_client.post(f"/api/user/profile/{user_id}", json=_profile())
    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["userName"] == "alice"
    assert data["grade"] == 3
    assert data["links"] == ["https://git.example/alice", "", ""]

    fetched = client.get(f"/api/user/profile/{user_id}")
    assert fetched.status_code == 200
    assert fetched.get_json()["data"]["email"] == "alice@cau.ac.kr"

    assert test_client.post(f"/api/user/profile/{user_id}", json=_profile()).status_code == 409


def test_profile_requires_owner_and_verified_user(login_client):
    owner_client, owner_id = login_client("owner@cau.ac.kr")
    other_client, _ = login_client("other@cau.ac.kr")
    guest_client, guest_id = login_client("guest@cau.ac.kr", role="GUEST")

    assert other_client.post(f"/api/user/profile/{owner_id}", json=_profile()).status_code == 403
    assert guest_client.post(f"/api/user/profile/{guest_id}", json=_profile()).status_code == 403
    assert owner_client.post(f"/api/user/profile/{owner_id}", json={"userName": "x"}).status_code == 400


def test_profile_not_found(client):
    assert client.get("/api/user/profile/unknown").status_code == 404


def test_update_profile_and_duplicate_names(login_client, client):
    first_client, first_id = login_client("first@cau.ac.kr")
    second_client, second_id = login_client("second@cau.ac.kr")
    first_client.post(f"/api/user/profile/{first_id}", json=_profile(userName="first"))
    second_client.post(f"/api/user/profile/{second_id}", json=_profile(userName="second"))

    taken = client.get("/api/user/profile/duplicate?username=first")
    assert taken.get_json()["data"] is False
    free = client.get("/api/user/profile/duplicate?username=third")
    assert free.get_json()["data"] is True

    assert second_client.patch(f"/api/user/profile/{second_id}", json={"userName": "first"}).status_code == 409
    assert first_client.patch(f"/api/user/profile/{second_id}", json={"bio": "hi"}).status_code == 403
    assert second_client.patch(f"/api/user/profile/{second_id}", json={"grade": "high"}).status_code == 400

    response = second_client.patch(
        f"/api/user/profile/{second_id}", json={"bio": "hello", "onBreak": True, "categories": [100, 301]}
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["bio"] == "hello"
    assert data["onBreak"] is True
    assert data["categories"] == ["100", "301"]
