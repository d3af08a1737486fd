"""Notification inbox endpoints."""

from __future__ import annotations

from conftest import create_study


def test_notifications_list_read_and_delete(login_client, client):
    host_client, host_id = login_client("host@cau.ac.kr")
    member_client, _ = login_client("member@cau.ac.kr")
    study_id = create_study(host_client, title="Graph theory")
    member_client.post(f"/api/study/user/{study_id}", json={"tempBio": "hello"})
    member_client.post(f"/api/study/{study_id}/comment", json={"content": "when?"})

    assert client.get("/api/user/notification").status_code == 401

    inbox = host_client.get("/api/user/notification").get_json()["data"]
    assert [item["type"] for item in inbox] == ["NEW_COMMENT", "NEW_APPLY"]
    assert all(item["userId"] == host_id for item in inbox)
    assert "Graph theory" in inbox[0]["about"]
    assert inbox[0]["isRead"] is False

    notification_id = inbox[0]["id"]
    assert member_client.patch(f"/api/user/notification/{notification_id}").status_code == 404

    marked = host_client.patch(f"/api/user/notification/{notification_id}")
    assert marked.status_code == 200
    assert marked.get_json()["data"]["isRead"] is True

    assert member_client.delete(f"/api/user/notification/{notification_id}").status_code == 404
    assert host_client.delete(f"/api/user/notification/{notification_id}").status_code == 200
    assert len(host_client.get("/api/user/notification").get_json()["data"]) == 1
    assert host_client.delete("/api/user/notification/9999").status_code == 404
