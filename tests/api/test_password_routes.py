from tests.api.conftest import request_code

RESET_ACK = "If an account with this email exists, an OTP code has been sent."


def reset_body(email, otp, password="NewPass1!", confirm=None):
    return {
        "email": email,
        "otp": otp,
        "newPassword": password,
        "confirmPassword": password if confirm is None else confirm,
    }


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_forgot_password_known_and_unknown_are_indistinguishable(client, deps):
    known = client.post("/v1/password/forgot", json={"email": "user@example.com"})
    unknown = client.post("/v1/password/forgot", json={"email": "ghost@nowhere.test"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": RESET_ACK}
    assert len(deps["delivery"].calls) == 1

    verify = client.post(
        "/v1/password/verify-otp", json={"email": "ghost@nowhere.test", "otp": "A1B2C"}
    )
    assert verify.status_code == 401


def test_forgot_password_validation(client):
    missing = client.post("/v1/password/forgot", json={})
    assert missing.status_code == 400
    assert missing.json() == {"error": "InvalidInput", "detail": "Email is required"}

    malformed = client.post("/v1/password/forgot", json={"email": "nope"})
    assert malformed.status_code == 400
    assert malformed.json()["detail"] == "Invalid email format"


def test_full_reset_flow(client, deps):
    code = request_code(client, deps)

    verify = client.post(
        "/v1/password/verify-otp", json={"email": "USER@EXAMPLE.COM", "otp": code}
    )
    assert verify.status_code == 200, verify.text
    assert verify.json() == {
        "message": "OTP verified successfully",
        "verified": True,
        "expires_in_seconds": 600,
    }

    reset = client.post("/v1/password/reset", json=reset_body("user@example.com", code))
    assert reset.status_code == 200, reset.text
    assert reset.json()["message"].startswith("Password reset successfully")
    assert deps["uow"].accounts.password_hash_calls == [("u1", "hashed-NewPass1!")]

    again = client.post("/v1/password/reset", json=reset_body("user@example.com", code))
    assert again.status_code == 401
    assert again.json()["error"] == "InvalidOrExpiredCode"

    verify_again = client.post(
        "/v1/password/verify-otp", json={"email": "user@example.com", "otp": code}
    )
    assert verify_again.status_code == 401


def test_reset_without_verify_step(client, deps):
    code = request_code(client, deps)

    reset = client.post(
        "/v1/password/reset", json=reset_body("user@example.com", code.lower())
    )
    assert reset.status_code == 200, reset.text


def test_verify_rejects_malformed_code_with_400(client, deps):
    request_code(client, deps)
    response = client.post(
        "/v1/password/verify-otp", json={"email": "user@example.com", "otp": "12"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidOTPFormat"


def test_verify_failures_share_one_message(client, deps):
    code = request_code(client, deps)
    wrong = "AAAAA" if code != "AAAAA" else "BBBBB"

    wrong_code = client.post(
        "/v1/password/verify-otp", json={"email": "user@example.com", "otp": wrong}
    )
    no_record = client.post(
        "/v1/password/verify-otp", json={"email": "other@example.com", "otp": wrong}
    )
    deps["clock"].advance(minutes=10)
    expired = client.post(
        "/v1/password/verify-otp", json={"email": "user@example.com", "otp": code}
    )

    assert wrong_code.status_code == no_record.status_code == expired.status_code == 401
    assert wrong_code.json() == no_record.json() == expired.json()


def test_reset_reports_mismatch_and_weak_password(client, deps):
    code = request_code(client, deps)

    mismatch = client.post(
        "/v1/password/reset",
        json=reset_body("user@example.com", code, "NewPass1!", "NewPass2!"),
    )
    assert mismatch.status_code == 400
    assert mismatch.json() == {"error": "PasswordMismatch", "detail": "Passwords do not match"}

    weak = client.post(
        "/v1/password/reset", json=reset_body("user@example.com", code, "short")
    )
    assert weak.status_code == 400
    assert weak.json()["error"] == "WeakPassword"
    assert "at least 7 characters" in weak.json()["detail"]


def test_reset_missing_fields(client):
    response = client.post(
        "/v1/password/reset", json={"email": "user@example.com", "otp": "A1B2C"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "New password is required"


def test_reset_unknown_account_is_404(client, deps):
    code = request_code(client, deps)
    deps["uow"].accounts.by_email.clear()

    response = client.post("/v1/password/reset", json=reset_body("user@example.com", code))
    assert response.status_code == 404
    assert response.json() == {"error": "AccountNotFound", "detail": "User not found"}
