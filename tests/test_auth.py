from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from provisioning_api.auth.jwt import (
    PASSWORD_CONFIRMED_CLAIM,
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    issue_token,
)
from provisioning_api.auth.models import Principal

CFG = JwtConfig(alg="HS256", issuer="test-issuer", audience="test-aud", secret="s3cret")


def test_token_carries_password_confirmation() -> None:
    confirmed = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    payload = decode_and_validate(
        cfg=CFG, token=issue_token(cfg=CFG, subject="alice", password_confirmed_at=confirmed)
    )
    assert payload["sub"] == "alice"
    assert payload[PASSWORD_CONFIRMED_CLAIM] == int(confirmed.timestamp())

    plain = decode_and_validate(cfg=CFG, token=issue_token(cfg=CFG, subject="alice"))
    assert PASSWORD_CONFIRMED_CLAIM not in plain


def test_token_for_other_audience_is_rejected() -> None:
    other = JwtConfig(alg="HS256", issuer="test-issuer", audience="elsewhere", secret="s3cret")
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=issue_token(cfg=other, subject="alice"))


def test_expired_token_is_rejected() -> None:
    token = issue_token(cfg=CFG, subject="alice", ttl=timedelta(seconds=-5))
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


def test_password_confirmation_window() -> None:
    now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    window = timedelta(minutes=30)

    assert not Principal(subject="alice").password_confirmed_within(window, now=now)
    recent = Principal(subject="alice", password_confirmed_at=now - timedelta(minutes=10))
    assert recent.password_confirmed_within(window, now=now)
    stale = Principal(subject="alice", password_confirmed_at=now - timedelta(minutes=31))
    assert not stale.password_confirmed_within(window, now=now)
