"""Administrator notices."""

from __future__ import annotations


def test_notice_write_requires_admin(login_client, client):
    user_client, _ = login_client("user@cau.ac.kr")
    payload = {"title": "Maintenance", "about": "Down on Sunday"}

    assert client.post("/api/notice", json=payload).status_code == 401
    assert user_client.post("/api/notice", json=payload).status_code == 403


def test_notice_crud(login_client, client):
    admin_client, admin_id = login_client("admin@cau.ac.kr", role="ADMIN")

    assert admin_client.post("/api/notice", json={"title": "No body"}).status_code == 400

    created = admin_client.post("/api/notice", json={"title": "Welcome", "about": "Hello all"})
    assert created.status_code == 201
    notice_id = created.get_json()["id"]

    assert client.get("/api/notice/unknown").status_code == 404
    detail = client.get(f"/api/notice/{notice_id}").get_json()["data"]
    assert detail["title"] == "Welcome"
    assert detail["hostId"] == admin_id
    assert detail["views"] == 1

    assert admin_client.patch("/api/notice/unknown", json={"title": "x"}).status_code == 404
    assert admin_client.patch(f"/api/notice/{notice_id}", json={"views": 10}).status_code == 400
    updated = admin_client.patch(f"/api/notice/{notice_id}", json={"title": "Welcome!"})
    assert updated.status_code == 200
    assert updated.get_json()["data"]["title"] == "Welcome!"

    assert admin_client.delete(f"/api/notice/{notice_id}").status_code == 200
    assert admin_client.delete(f"/api/notice/{notice_id}").status_code == 404


def test_notice_listing_is_paginated(login_client, client):
    admin_client, _ = login_client("admin@cau.ac.kr", role="ADMIN")
    for index in range(5):
        admin_client.post("/api/notice", json={"title": f"Notice {index}", "about": "body"})

    page = client.get("/api/notice?limit=2&pageNo=3").get_json()

    assert page["total"] == 5
    assert page["pages"] == 3
    assert page["pageNo"] == 3
    assert len(page["data"]) == 1
