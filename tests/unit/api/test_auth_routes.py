from src.marketplace.entities.core._base import utc_now
from src.marketplace.runtime.context import get_config


class TestAuthRoutes:
    def test_register_returns_challenge(self, client, sms_gateway):
        resp = client.post(
            "/auth/register",
            json={"username": "hala", "phoneNumber": "0795551111", "role": "customer"},
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["verificationId"] == "0795551111"
        assert body["otp"] == sms_gateway.last_code
        assert "expiresAt" in body

    def test_register_rejects_admin_role(self, client):
        resp = client.post("/auth/register", json={"username": "boss", "role": "admin"})
        assert resp.status_code == 422

    def test_register_then_verify(self, client, sms_gateway):
        client.post("/auth/register", json={"username": "hala", "phoneNumber": "0795551111"})
        resp = client.post(
            "/auth/verify-otp",
            json={
                "phoneNumber": "0795551111",
                "otp": sms_gateway.last_code,
                "purpose": "registration",
            },
        )

        assert resp.status_code == 200
        assert resp.json() == {}

    def test_login_round_trip(self, client, customer, sms_gateway):
        challenge = client.post("/auth/login", json={"emailOrPhone": "+962791234567"})
        assert challenge.status_code == 200
        assert challenge.json()["verificationId"] == "962791234567"

        resp = client.post(
            "/auth/login",
            json={"emailOrPhone": "+962791234567", "otp": challenge.json()["otp"]},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["token"]
        assert body["user"]["id"] == customer.id
        assert "otp" not in body["user"]
        assert "vendorStatus" not in body

    def test_vendor_login_includes_vendor_status(self, client, bakery, sms_gateway):
        client.post("/auth/login", json={"username": "baker"})
        resp = client.post("/auth/login", json={"username": "baker", "otp": sms_gateway.last_code})

        assert resp.json()["vendorStatus"] == {
            "vendorType": "bakery",
            "hasVendor": True,
            "approved": True,
            "pending": False,
        }

    def test_wrong_otp(self, client, customer):
        client.post("/auth/login", json={"username": "layla"})
        resp = client.post("/auth/login", json={"username": "layla", "otp": "nope"})

        assert resp.status_code == 400
        assert resp.json() == {"detail": "Invalid or expired OTP"}

    def test_unknown_user(self, client):
        resp = client.post("/auth/login", json={"username": "ghost"})
        assert resp.status_code == 401

    def test_missing_identifier(self, client):
        resp = client.post("/auth/login", json={})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Please provide email, username, or phone number"

    def test_suspended_user(self, client, make_user):
        make_user(username="banned", phone_number="0790009999", deleted_at=utc_now())
        resp = client.post("/auth/login", json={"username": "banned"})
        assert resp.status_code == 403

    def test_resend_otp(self, client, customer, sms_gateway):
        resp = client.post("/auth/resend-otp", json={"email": "layla@example.com"})

        assert resp.status_code == 200
        assert resp.json()["verificationId"] == "layla@example.com"
        assert len(sms_gateway.sent) == 1

    def test_verify_otp_requires_code(self, client, customer):
        resp = client.post("/auth/verify-otp", json={"username": "layla"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "OTP is required"

    def test_logout_requires_session(self, client, customer, auth_headers):
        assert client.post("/auth/logout").status_code == 401
        assert client.post("/auth/logout", headers=auth_headers(customer)).status_code == 200


class TestCurrentUser:
    def test_me(self, client, customer, auth_headers):
        resp = client.get("/users/me", headers=auth_headers(customer))

        assert resp.status_code == 200
        assert resp.json()["username"] == "layla"
        assert "passwordHash" not in resp.json()

    def test_missing_token(self, client):
        resp = client.get("/users/me")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Missing Bearer token"

    def test_invalid_token(self, client):
        resp = client.get("/users/me", headers={"Authorization": "Bearer forged.token.value"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid or expired token"

    def test_suspension_applies_to_existing_tokens(
        self, client, customer, admin, auth_headers
    ):
        headers = auth_headers(customer)
        client.put(f"/admin/users/{customer.id}/suspend", headers=auth_headers(admin))

        assert client.get("/users/me", headers=headers).status_code == 403

    def test_response_headers(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["X-Request-ID"]


class TestOtpThrottling:
    def test_code_guessing_is_throttled(self, client, customer, monkeypatch):
        monkeypatch.setattr(get_config().rate_limiter, "otp_requests", 3)
        client.post("/auth/login", json={"username": "layla"})

        statuses = [
            client.post("/auth/verify-otp", json={"username": "layla", "otp": "000000x"}).status_code
            for _ in range(5)
        ]

        assert statuses[:3] == [400, 400, 400]
        assert statuses[3:] == [429, 429]
