"""Tests for reset token generation and expiry."""

from datetime import timedelta

from whereto_auth.domain.services import ResetTokenCodec
from whereto_auth.domain.services.reset_tokens import RESET_TOKEN_TTL


class TestResetTokenCodec:
    def test_issue_is_unique(self, codec: ResetTokenCodec):
        """Two tokens never share a secret or fingerprint."""
        first = codec.issue()
        second = codec.issue()
        assert first.secret != second.secret
        assert first.fingerprint != second.fingerprint

    def test_secret_has_256_bits(self, codec: ResetTokenCodec):
        token = codec.issue()
        assert len(token.secret) == 64
        int(token.secret, 16)  # hex

    def test_fingerprint_is_deterministic_and_one_way(self, codec: ResetTokenCodec):
        token = codec.issue()
        assert codec.fingerprint_of(token.secret) == token.fingerprint
        assert token.fingerprint != token.secret
        assert len(token.fingerprint) == 64

    def test_known_fingerprint(self):
        # sha256("abc")
        assert ResetTokenCodec.fingerprint_of("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_expiry_is_one_hour_after_issue(self, codec: ResetTokenCodec, clock):
        token = codec.issue()
        assert RESET_TOKEN_TTL == timedelta(hours=1)
        assert token.expires_at == clock.now + timedelta(hours=1)

    def test_is_live_fails_closed(self, codec: ResetTokenCodec, clock):
        token = codec.issue()
        assert codec.is_live(token.expires_at)

        clock.advance(timedelta(hours=1))
        assert not codec.is_live(token.expires_at)  # exactly at expiry
        assert not codec.is_live(None)

    def test_custom_ttl(self, clock):
        codec = ResetTokenCodec(ttl=timedelta(minutes=15), clock=clock)
        assert codec.issue().expires_at == clock.now + timedelta(minutes=15)
