"""Signup, verification, login/logout and password reset flows."""

from __future__ import annotations

from models import db
from models.user import User
from services import user as user_service

from conftest import DEFAULT_PASSWORD


def _capture_mail(app, monkeypatch):
    sent = []
    mailer = app.extensions["mail"]
    monkeypatch.setattr(
        mailer, "send_signup_mail", lambda email, user_id, token: sent.append(("signup", email, user_id, token)) or True
    )
    monkeypatch.setattr(
        mailer, "send_password_reset_mail", lambda email, token: sent.append(("reset", email, token)) or True
    )
    return sent


def _set_cookie_names(response):
    return [header.split("=", 1)[0] for header in response.headers.getlist("Set-Cookie")]


def test_signup_creates_guest_and_mails_token(app, client, monkeypatch):
    sent = _capture_mail(app, monkeypatch)

    response = client.post("/api/user", json={"email": " New@CAU.ac.kr ", "password": "secret"})

    assert response.status_code == 201
    user_id = response.get_json()["id"]
    assert sent and sent[0][1] == "new@cau.ac.kr" and sent[0][2] == user_id
    with app.app_context():
        user = db.session.get(User, user_id)
        assert user.role == "GUEST"
        assert user.token == sent[0][3]


def test_signup_validation(app, client, monkeypatch):
    _capture_mail(app, monkeypatch)

    assert client.post("/api/user", json={"email": "a@cau.ac.kr"}).status_code == 400
    assert client.post("/api/user", json={"email": "a@gmail.com", "password": "x"}).status_code == 400
    assert client.post("/api/user", json={"email": "a@cau.ac.kr", "password": "x"}).status_code == 201

    duplicate = client.post("/api/user", json={"email": "A@cau.ac.kr", "password": "y"})
    assert duplicate.status_code == 409
    assert duplicate.get_json()["error"] == "conflict"


def test_verify_signup_promotes_user_once(app, client, monkeypatch):
    sent = _capture_mail(app, monkeypatch)
    user_id = client.post("/api/user", json={"email": "v@cau.ac.kr", "password": "pw"}).get_json()["id"]
    token = sent[0][3]

    assert client.patch(f"/api/user/{user_id}/role", json={"token": "garbage"}).status_code == 403

    response = client.patch(f"/api/user/{user_id}/role", json={"token": token})
    assert response.status_code == 200
    assert response.get_json()["data"]["role"] == "USER"

    # the token is single use
    assert client.patch(f"/api/user/{user_id}/role", json={"token": token}).status_code == 404


def test_verify_signup_rejects_token_of_other_user(app, client, monkeypatch):
    sent = _capture_mail(app, monkeypatch)
    first = client.post("/api/user", json={"email": "one@cau.ac.kr", "password": "pw"}).get_json()["id"]
    client.post("/api/user", json={"email": "two@cau.ac.kr", "password": "pw"})
    second_token = sent[1][3]

    response = client.patch(f"/api/user/{first}/role", json={"token": second_token})

    assert response.status_code == 403


def test_login_sets_cookies_and_errors(client, make_user):
    make_user("login@cau.ac.kr")

    assert client.post("/api/user/login", json={"email": "login@cau.ac.kr"}).status_code == 400
    assert client.post(
        "/api/user/login", json={"email": "nobody@cau.ac.kr", "password": "x"}
    ).status_code == 404
    assert client.post(
        "/api/user/login", json={"email": "login@cau.ac.kr", "password": "wrong"}
    ).status_code == 403

    response = client.post(
        "/api/user/login", json={"email": "login@cau.ac.kr", "password": DEFAULT_PASSWORD}
    )
    assert response.status_code == 200
    cookies = _set_cookie_names(response)
    assert "accessToken" in cookies
    assert "refreshToken" in cookies

    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.get_json()["data"]["email"] == "login@cau.ac.kr"


def test_refresh_cookie_issues_new_access_token(login_client):
    test_client, user_id = login_client("refresh@cau.ac.kr")
    test_client.delete_cookie("accessToken")

    response = test_client.get("/api/user")

    assert response.status_code == 200
    assert response.get_json()["data"]["id"] == user_id
    assert "accessToken" in _set_cookie_names(response)
    assert test_client.get_cookie("accessToken") is not None


def test_logout_invalidates_both_tokens(app, login_client):
    test_client, user_id = login_client("logout@cau.ac.kr")
    refresh_cookie = test_client.get_cookie("refreshToken").value
    access_cookie = test_client.get_cookie("accessToken").value

    assert test_client.patch("/api/user/logout").status_code == 200
    assert test_client.get("/api/user").status_code == 401

    # replaying the old access token is anonymous
    test_client.set_cookie("accessToken", access_cookie)
    assert test_client.get("/api/user").status_code == 401

    # replaying the refresh token is anonymous and clears the cookies
    test_client.delete_cookie("accessToken")
    test_client.set_cookie("refreshToken", refresh_cookie)
    response = test_client.get("/api/user")
    assert response.status_code == 401
    assert "refreshToken" in _set_cookie_names(response)
    with app.app_context():
        assert db.session.get(User, user_id).is_logout is True


def test_invalid_token_is_treated_as_anonymous(client):
    client.set_cookie("accessToken", "not-a-jwt")
    client.set_cookie("refreshToken", "also-not-a-jwt")

    assert client.get("/api/user").status_code == 401
    assert client.get("/api/study").status_code == 200


def test_delete_account_removes_user(app, login_client):
    test_client, user_id = login_client("gone@cau.ac.kr")

    assert test_client.delete("/api/user").status_code == 200
    with app.app_context():
        assert db.session.get(User, user_id) is None


def test_password_reset_flow(app, client, make_user, monkeypatch):
    sent = _capture_mail(app, monkeypatch)
    make_user("reset@cau.ac.kr")

    assert client.patch("/api/user/password", json={"email": "missing@cau.ac.kr"}).status_code == 404
    assert client.patch("/api/user/password", json={"email": "reset@cau.ac.kr"}).status_code == 200
    token = sent[-1][2]

    assert client.patch(
        "/api/user/unknown-token/password", json={"email": "reset@cau.ac.kr", "password": "n"}
    ).status_code == 404
    assert client.patch(
        f"/api/user/{token}/password", json={"email": "other@cau.ac.kr", "password": "n"}
    ).status_code == 403
    assert client.patch(
        f"/api/user/{token}/password", json={"email": "reset@cau.ac.kr", "password": "NewPass1"}
    ).status_code == 200

    login = client.post("/api/user/login", json={"email": "reset@cau.ac.kr", "password": "NewPass1"})
    assert login.status_code == 200


def test_expired_signup_token_is_rejected(app, client, monkeypatch):
    from datetime import timedelta

    sent = _capture_mail(app, monkeypatch)
    app.config["SIGNUP_TOKEN_EXPIRES"] = timedelta(seconds=-1)
    user_id = client.post("/api/user", json={"email": "late@cau.ac.kr", "password": "pw"}).get_json()["id"]

    response = client.patch(f"/api/user/{user_id}/role", json={"token": sent[0][3]})

    assert response.status_code == 403
    assert "expired" in response.get_json()["message"]


def test_is_institutional_email():
    assert user_service.is_institutional_email("a@cau.ac.kr", "cau.ac.kr")
    assert not user_service.is_institutional_email("@cau.ac.kr", "cau.ac.kr")
    assert not user_service.is_institutional_email("a@cau.ac.kr.evil.com", "cau.ac.kr")


def test_non_string_credentials_are_rejected(app, client, make_user, monkeypatch):
    sent = _capture_mail(app, monkeypatch)
    make_user("typed@cau.ac.kr")

    assert client.post("/api/user", json={"email": 123, "password": "x"}).status_code == 400
    assert client.post("/api/user", json={"email": "n@cau.ac.kr", "password": 123}).status_code == 400
    assert client.post("/api/user/login", json={"email": 123, "password": "x"}).status_code == 400
    assert client.post(
        "/api/user/login", json={"email": "typed@cau.ac.kr", "password": ["x"]}
    ).status_code == 400
    assert client.patch("/api/user/password", json={"email": ["typed@cau.ac.kr"]}).status_code == 400
    assert not sent
