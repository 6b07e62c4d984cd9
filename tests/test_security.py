"""Tests for the token codec."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.core.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
)
from app.core.security import TokenCodec, format_expiry

SECRET = "codec-test-secret"


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(SECRET)


BASE64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def _flip_signature_char(token: str, index: int) -> str:
    """Swap one signature character for its neighbour in the base64url alphabet."""
    header, payload, signature = token.split(".")
    index %= len(signature)
    neighbour = BASE64URL_ALPHABET[BASE64URL_ALPHABET.index(signature[index]) ^ 1]
    signature = signature[:index] + neighbour + signature[index + 1 :]
    return ".".join([header, payload, signature])


class TestIssue:
    """Tests for TokenCodec.issue."""

    def test_issue_returns_expiry_from_ttl(self, codec: TokenCodec):
        """Expiry is now plus the ttl, in unix seconds."""
        before = int(datetime.now(UTC).timestamp())
        issued = codec.issue("alice", timedelta(minutes=30))
        after = int(datetime.now(UTC).timestamp())

        assert before + 1800 <= issued.expires_at <= after + 1800

    def test_issue_embeds_username_and_exp_claims(self, codec: TokenCodec):
        """Only the principal and expiry are signed into the token."""
        issued = codec.issue("alice", timedelta(minutes=5))

        claims = jwt.get_unverified_claims(issued.token)

        assert claims == {"username": "alice", "exp": issued.expires_at}
        assert jwt.get_unverified_header(issued.token)["alg"] == "HS256"


class TestVerify:
    """Tests for TokenCodec.verify."""

    @pytest.mark.parametrize("principal", ["alice", "bob_the_builder", "ünïcødé"])
    def test_round_trip(self, codec: TokenCodec, principal: str):
        issued = codec.issue(principal, timedelta(minutes=30))

        assert codec.verify(issued.token) == principal

    def test_expired_token_fails(self, codec: TokenCodec):
        issued = codec.issue("alice", timedelta(minutes=-1))

        with pytest.raises(ExpiredTokenError):
            codec.verify(issued.token)

    def test_tampered_signature_fails_at_every_position(self, codec: TokenCodec):
        """Includes the last character, whose low bits are padding."""
        issued = codec.issue("alice", timedelta(minutes=30))
        signature_length = len(issued.token.rsplit(".", 1)[-1])

        for index in range(signature_length):
            with pytest.raises(InvalidSignatureError):
                codec.verify(_flip_signature_char(issued.token, index))

    def test_padding_bits_of_last_character_are_checked(self, codec: TokenCodec):
        issued = codec.issue("alice", timedelta(minutes=30))

        with pytest.raises(InvalidSignatureError):
            codec.verify(_flip_signature_char(issued.token, -1))

    def test_other_secret_fails_signature(self, codec: TokenCodec):
        issued = TokenCodec("another-secret").issue("alice", timedelta(minutes=30))

        with pytest.raises(InvalidSignatureError):
            codec.verify(issued.token)

    def test_refresh_lifetime_token_is_accepted(self, codec: TokenCodec):
        """Access and refresh tokens are indistinguishable at verification."""
        issued = codec.issue("alice", timedelta(days=30))

        assert codec.verify(issued.token) == "alice"

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b", "a.b.c", "Bearer"])
    def test_malformed_token(self, codec: TokenCodec, token: str):
        with pytest.raises(MalformedTokenError):
            codec.verify(token)

    def test_missing_principal_claim(self, codec: TokenCodec):
        token = jwt.encode({"exp": datetime.now(UTC) + timedelta(minutes=5)}, SECRET)

        with pytest.raises(MalformedTokenError):
            codec.verify(token)

    def test_errors_share_a_base_class(self, codec: TokenCodec):
        with pytest.raises(TokenError):
            codec.verify("garbage")


def test_format_expiry_is_rfc3339_utc():
    assert format_expiry(0) == "1970-01-01T00:00:00Z"
    assert format_expiry(1700000000) == "2023-11-14T22:13:20Z"
