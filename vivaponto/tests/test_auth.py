"""
Tests for authentication endpoints
"""
from fastapi import status
from vivaponto.core.security import create_access_token, decode_token, hash_password, verify_password

EMPLOYEE_PASSWORD = "emppass123"


def test_login_success(client, employee_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": employee_user.email, "password": EMPLOYEE_PASSWORD}
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == employee_user.id
    assert data["user"]["role"] == "employee"

    payload = decode_token(data["access_token"])
    assert payload["sub"] == str(employee_user.id)
    assert payload["role"] == "employee"


def test_login_email_is_case_insensitive(client, employee_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": employee_user.email.upper(), "password": EMPLOYEE_PASSWORD}
    )
    assert response.status_code == status.HTTP_200_OK


def test_login_wrong_password(client, employee_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": employee_user.email, "password": "wrong"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_unknown_email(client, db):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@test.com", "password": "whatever"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid email or password"


def test_invalid_token_is_rejected(client, db):
    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_for_deleted_user_is_rejected(client, db):
    token = create_access_token({"sub": "4242"})
    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_expired_token_is_rejected(client, employee_user):
    token = create_access_token({"sub": str(employee_user.id)}, expires_minutes=-1)
    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_password_hashing():
    hashed = hash_password("s3nha-forte")
    assert hashed != "s3nha-forte"
    assert verify_password("s3nha-forte", hashed)
    assert not verify_password("outra", hashed)
    assert not verify_password("s3nha-forte", "not-a-bcrypt-hash")
