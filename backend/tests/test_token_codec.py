"""
Tests for the identity token codec.

Tests cover:
- Issuing and verifying tokens
- Expiry against an injected clock
- Signature tampering and foreign secrets
- Malformed payloads
"""

from datetime import timedelta

import pytest
from jose import jwt

from core.exceptions import ExpiredCredentialError, InvalidCredentialError
from core.token_codec import IdentityTokenCodec, utc_now


CUSTOMER_ID = "3f1c2a8e-0000-4000-8000-000000000001"
EMAIL = "alice@example.com"


def _tamper_signature(token: str, position: int = 0) -> str:
    header, payload, signature = token.split(".")
    chars = list(signature)
    chars[position] = "A" if chars[position] != "A" else "B"
    return ".".join([header, payload, "".join(chars)])


class TestIssueAndVerify:
    def test_round_trip_returns_claim(self, codec, clock):
        token = codec.issue(CUSTOMER_ID, EMAIL)
        claim = codec.verify(token)

        assert claim.customer_id == CUSTOMER_ID
        assert claim.email == EMAIL
        assert claim.issued_at == clock.now
        assert claim.expires_at == clock.now + timedelta(hours=1)

    def test_payload_carries_identity_claims(self, codec, clock):
        token = codec.issue(CUSTOMER_ID, EMAIL)
        payload = jwt.get_unverified_claims(token)

        assert payload["sub"] == CUSTOMER_ID
        assert payload["customerId"] == CUSTOMER_ID
        assert payload["email"] == EMAIL
        assert payload["exp"] - payload["iat"] == 3600

    def test_custom_lifetime(self, clock):
        codec = IdentityTokenCodec("another-secret", lifetime=timedelta(minutes=5), clock=clock)
        claim = codec.verify(codec.issue(CUSTOMER_ID, EMAIL))
        assert claim.expires_at - claim.issued_at == timedelta(minutes=5)

    def test_secret_is_required(self):
        with pytest.raises(ValueError):
            IdentityTokenCodec("")


class TestExpiry:
    def test_valid_just_before_expiry(self, codec, clock):
        token = codec.issue(CUSTOMER_ID, EMAIL)
        clock.advance(minutes=59, seconds=59)

        assert codec.verify(token).customer_id == CUSTOMER_ID

    def test_expired_exactly_at_expiry(self, codec, clock):
        token = codec.issue(CUSTOMER_ID, EMAIL)
        clock.advance(hours=1)

        with pytest.raises(ExpiredCredentialError):
            codec.verify(token)

    def test_expired_one_second_after_lifetime(self, codec, clock):
        token = codec.issue(CUSTOMER_ID, EMAIL)
        clock.advance(hours=1, seconds=1)

        with pytest.raises(ExpiredCredentialError) as exc_info:
            codec.verify(token)
        assert exc_info.value.error_code == "EXPIRED_CREDENTIAL"
        assert exc_info.value.status_code == 401

    def test_expired_against_system_clock(self):
        issued_long_ago = utc_now() - timedelta(hours=1, seconds=1)
        issuer = IdentityTokenCodec("s3cret", clock=lambda: issued_long_ago)
        token = issuer.issue(CUSTOMER_ID, EMAIL)

        with pytest.raises(ExpiredCredentialError):
            IdentityTokenCodec("s3cret").verify(token)

    def test_injected_clock_governs_validity(self, codec, clock):
        # Issued and checked in 2024, long before the real current time
        token = codec.issue(CUSTOMER_ID, EMAIL)
        clock.advance(minutes=30)

        assert codec.verify(token).email == EMAIL


class TestRejection:
    @pytest.mark.parametrize("position", [0, 10, 20])
    def test_tampered_signature_is_invalid(self, codec, position):
        token = _tamper_signature(codec.issue(CUSTOMER_ID, EMAIL), position)

        with pytest.raises(InvalidCredentialError):
            codec.verify(token)

    def test_tampered_payload_is_invalid(self, codec):
        header, _, signature = codec.issue(CUSTOMER_ID, EMAIL).split(".")
        forged_payload = codec.issue("someone-else", "mallory@example.com").split(".")[1]

        with pytest.raises(InvalidCredentialError):
            codec.verify(".".join([header, forged_payload, signature]))

    def test_token_signed_with_other_secret(self, codec, clock):
        foreign = IdentityTokenCodec("not-the-test-secret", clock=clock)
        token = foreign.issue(CUSTOMER_ID, EMAIL)

        with pytest.raises(InvalidCredentialError):
            codec.verify(token)

    @pytest.mark.parametrize("token", ["garbage", "a.b.c", ""])
    def test_malformed_token(self, codec, token):
        with pytest.raises(InvalidCredentialError):
            codec.verify(token)

    def test_missing_customer_id_claim(self, codec, clock):
        iat = int(clock.now.timestamp())
        token = jwt.encode(
            {"sub": CUSTOMER_ID, "email": EMAIL, "iat": iat, "exp": iat + 3600},
            "test-secret-key",
            algorithm="HS256",
        )

        with pytest.raises(InvalidCredentialError):
            codec.verify(token)

    def test_missing_exp_claim(self, codec, clock):
        token = jwt.encode(
            {
                "customerId": CUSTOMER_ID,
                "email": EMAIL,
                "iat": int(clock.now.timestamp()),
            },
            "test-secret-key",
            algorithm="HS256",
        )

        with pytest.raises(InvalidCredentialError):
            codec.verify(token)
