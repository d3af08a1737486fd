"""Threaded comments, tombstones and notifications."""

from __future__ import annotations

from models import db
from models.comment import DELETED_COMMENT_CONTENT, Comment
from models.notification import Notification

from conftest import create_study


def _post(test_client, study_id, content="question?", reply_to=None):
    body = {"content": content}
    if reply_to:
        body["replyTo"] = reply_to
    response = test_client.post(f"/api/study/{study_id}/comment", json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]["id"]


def _notification_types(app, user_id):
    with app.app_context():
        return [n.type for n in Notification.query.filter_by(user_id=user_id).order_by(Notification.id)]


def test_create_comment_validation(login_client, client):
    host_client, _ = login_client("host@cau.ac.kr")
    study_id = create_study(host_client)

    assert client.post(f"/api/study/{study_id}/comment", json={"content": "x"}).status_code == 401
    assert host_client.post(f"/api/study/{study_id}/comment", json={"content": ""}).status_code == 400
    assert host_client.post("/api/study/unknown/comment", json={"content": "x"}).status_code == 404
    assert host_client.post(
        f"/api/study/{study_id}/comment", json={"content": "x", "replyTo": "missing"}
    ).status_code == 404
    assert host_client.post(
        f"/api/study/{study_id}/comment", json={"content": "x", "replyTo": {"id": "missing"}}
    ).status_code == 400


def test_reply_must_target_top_level_comment_on_same_study(login_client):
    host_client, _ = login_client("host@cau.ac.kr")
    study_id = create_study(host_client)
    other_study = create_study(host_client, title="other")
    parent = _post(host_client, study_id)
    reply = _post(host_client, study_id, "answer", reply_to=parent)

    nested = host_client.post(f"/api/study/{study_id}/comment", json={"content": "x", "replyTo": reply})
    assert nested.status_code == 400
    cross = host_client.post(f"/api/study/{other_study}/comment", json={"content": "x", "replyTo": parent})
    assert cross.status_code == 404


def test_comment_notifications(app, login_client):
    host_client, host_id = login_client("host@cau.ac.kr")
    asker_client, asker_id = login_client("asker@cau.ac.kr")
    study_id = create_study(host_client)

    question = _post(asker_client, study_id)
    _post(host_client, study_id, "answer", reply_to=question)
    _post(host_client, study_id, "note to self")
    _post(asker_client, study_id, "thanks", reply_to=question)

    assert _notification_types(app, host_id) == ["NEW_COMMENT"]
    assert _notification_types(app, asker_id) == ["NEW_REPLY"]


def test_list_comments_nested(login_client, client):
    host_client, _ = login_client("host@cau.ac.kr")
    asker_client, _ = login_client("asker@cau.ac.kr")
    study_id = create_study(host_client)
    first = _post(asker_client, study_id, "first")
    _post(host_client, study_id, "reply", reply_to=first)
    _post(asker_client, study_id, "second")

    assert client.get("/api/study/unknown/comment").status_code == 404
    threads = client.get(f"/api/study/{study_id}/comment").get_json()["data"]

    assert [thread["content"] for thread in threads] == ["first", "second"]
    assert [reply["content"] for reply in threads[0]["replies"]] == ["reply"]
    assert threads[0]["metoo"] is False
    assert threads[0]["metooCount"] == 0


def test_update_comment_author_only(login_client):
    host_client, _ = login_client("host@cau.ac.kr")
    asker_client, _ = login_client("asker@cau.ac.kr")
    study_id = create_study(host_client)
    comment_id = _post(asker_client, study_id)
    url = f"/api/study/{study_id}/comment/{comment_id}"

    assert host_client.patch(url, json={"content": "edit"}).status_code == 403
    assert asker_client.patch(url, json={"content": ""}).status_code == 400
    assert asker_client.patch(f"/api/study/{study_id}/comment/unknown", json={"content": "x"}).status_code == 404

    response = asker_client.patch(url, json={"content": "edited"})
    assert response.status_code == 200
    assert response.get_json()["data"]["content"] == "edited"


def test_delete_comment_with_replies_is_anonymized(app, login_client):
    host_client, _ = login_client("host@cau.ac.kr")
    asker_client, _ = login_client("asker@cau.ac.kr")
    study_id = create_study(host_client)
    parent = _post(asker_client, study_id)
    reply = _post(host_client, study_id, "answer", reply_to=parent)

    assert asker_client.delete(f"/api/study/{study_id}/comment/{parent}").status_code == 200

    with app.app_context():
        comment = db.session.get(Comment, parent)
        assert comment is not None
        assert comment.content == DELETED_COMMENT_CONTENT
        assert comment.user_id is None
        assert comment.is_deleted is True

    # removing the last reply also removes the tombstoned parent
    assert host_client.delete(f"/api/study/{study_id}/comment/{reply}").status_code == 200
    with app.app_context():
        assert db.session.get(Comment, reply) is None
        assert db.session.get(Comment, parent) is None


def test_delete_leaf_comment_is_removed(app, login_client):
    host_client, _ = login_client("host@cau.ac.kr")
    asker_client, _ = login_client("asker@cau.ac.kr")
    stranger_client, _ = login_client("stranger@cau.ac.kr")
    study_id = create_study(host_client)
    comment_id = _post(asker_client, study_id)
    url = f"/api/study/{study_id}/comment/{comment_id}"

    assert stranger_client.delete(url).status_code == 403
    # the host may moderate comments on their study
    assert host_client.delete(url).status_code == 200
    with app.app_context():
        assert db.session.get(Comment, comment_id) is None
    assert host_client.delete(url).status_code == 404


def test_deleting_author_anonymizes_comments(app, login_client):
    host_client, _ = login_client("host@cau.ac.kr")
    asker_client, _ = login_client("asker@cau.ac.kr")
    study_id = create_study(host_client)
    comment_id = _post(asker_client, study_id)

    assert asker_client.delete("/api/user").status_code == 200

    with app.app_context():
        comment = db.session.get(Comment, comment_id)
        assert comment is not None
        assert comment.user_id is None
