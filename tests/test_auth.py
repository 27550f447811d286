# tests/test_auth.py
import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt

from textile_shop.core.auth import AccessTokenClaims, require_admin, require_client
from textile_shop.models.profile import Profile

ME = "/api/v1/profiles/me"


def test_new_profile_takes_contact_details_from_token(client, token_headers):
    headers = token_headers(
        uuid.uuid4(),
        "mariama@tissus-dakar.sn",
        phone="",
        user_metadata={
            "full_name": "Mariama Ba",
            "phone": "+221 76 111 22 33",
            "address": "Sicap Liberté, Dakar",
        },
    )

    me = client.get(ME, headers=headers).json()

    assert me["full_name"] == "Mariama Ba"
    assert me["phone"] == "+221 76 111 22 33"
    assert me["address"] == "Sicap Liberté, Dakar"
    assert me["role"] == "client"


def test_later_logins_keep_shopper_edits(client, token_headers):
    sub = uuid.uuid4()
    client.get(ME, headers=token_headers(sub, "ama@tissus-dakar.sn"))
    client.patch(
        ME,
        json={"full_name": "Ama Owusu", "address": "Osu, Accra"},
        headers=token_headers(sub, "ama@tissus-dakar.sn"),
    )

    headers = token_headers(
        sub,
        "ama.owusu@tissus-dakar.sn",
        phone="+233 20 000 0000",
        user_metadata={"full_name": "Ama", "address": "Kumasi"},
    )
    me = client.get(ME, headers=headers).json()

    assert me["email"] == "ama.owusu@tissus-dakar.sn"
    assert me["full_name"] == "Ama Owusu"
    assert me["address"] == "Osu, Accra"
    assert me["phone"] == "+233 20 000 0000"


def test_token_role_claim_cannot_promote(client, token_headers):
    headers = token_headers(uuid.uuid4(), "eve@tissus-dakar.sn", role="admin")

    assert client.get(ME, headers=headers).json()["role"] == "client"
    assert client.get("/api/v1/profiles", headers=headers).status_code == 403


def test_token_without_email_is_rejected(client):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "test-secret",
        algorithm="HS256",
    )

    resp = client.get(ME, headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert "email" in resp.json()["detail"]


def test_expired_token_is_rejected(client):
    token = jwt.encode(
        {
            "sub": str(uuid.uuid4()),
            "email": "late@tissus-dakar.sn",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        "test-secret",
        algorithm="HS256",
    )

    resp = client.get(ME, headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401


def test_display_name_falls_back_to_email():
    claims = AccessTokenClaims(sub=uuid.uuid4(), email="fatou@tissus-dakar.sn")

    assert claims.display_name == "fatou"
    assert claims.contact_phone is None
    assert claims.delivery_address is None


def test_role_guards():
    shopper = Profile(id=uuid.uuid4(), email="a@tissus-dakar.sn", full_name="a", role="client")

    assert require_client(shopper) is shopper
    assert require_admin.__name__ == "require_admin"
