from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from alumni_api.services.registry import build_services
from alumni_api.services.token_service import JWT_ALGORITHM, TokenService

PROFILE = {"id": "u1", "email": "user@x.com", "isAdmin": False}


def _make_user(repo, email="user@x.com"):
    return repo.create_user(email=email, password_hash="h", name="Ann", surname="Lee", phone_number="1")


def test_pair_tokens_verify_only_with_their_own_secret(tokens):
    pair = tokens.generate_token_pair(PROFILE)

    assert tokens.verify_access_token(pair.access_token) == PROFILE
    assert tokens.verify_refresh_token(pair.refresh_token) == PROFILE
    assert tokens.verify_refresh_token(pair.access_token) is None
    assert tokens.verify_access_token(pair.refresh_token) is None


def test_successive_pairs_differ(tokens):
    first = tokens.generate_token_pair(PROFILE)
    second = tokens.generate_token_pair(PROFILE)
    assert first.refresh_token != second.refresh_token
    assert first.access_token != second.access_token


def test_expired_and_malformed_tokens_are_rejected(make_tokens, stale_clock):
    svc = make_tokens(stale_clock)
    pair = svc.generate_token_pair(PROFILE)

    assert svc.verify_access_token(pair.access_token) is None
    # the refresh lifetime is much longer, so it survives
    assert svc.verify_refresh_token(pair.refresh_token) == PROFILE
    assert svc.verify_access_token("not-a-jwt") is None
    assert svc.verify_access_token("") is None
    assert svc.verify_refresh_token(None) is None


def test_token_signed_with_another_secret_is_rejected(tokens):
    forged = jwt.encode(
        {**PROFILE, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "someone-else",
        algorithm=JWT_ALGORITHM,
    )
    assert tokens.verify_access_token(forged) is None


def test_persist_keeps_a_single_record_per_user(repo, tokens):
    user = _make_user(repo)
    first = tokens.generate_token_pair({"id": user.id}).refresh_token
    second = tokens.generate_token_pair({"id": user.id}).refresh_token

    tokens.persist_refresh_token(user.id, first)
    tokens.persist_refresh_token(user.id, second)

    assert tokens.lookup_refresh_token(first) is None
    stored = tokens.lookup_refresh_token(second)
    assert stored is not None
    assert stored.user_id == user.id
    assert repo.find_refresh_token_by_user(user.id).refresh_token == second


def test_delete_refresh_token(repo, tokens):
    user = _make_user(repo)
    token = tokens.generate_token_pair({"id": user.id}).refresh_token
    tokens.persist_refresh_token(user.id, token)

    tokens.delete_refresh_token(token)

    assert tokens.lookup_refresh_token(token) is None
    assert tokens.lookup_refresh_token("") is None


@pytest.mark.parametrize(
    "access,refresh",
    [("", "r"), ("a", ""), ("same", "same")],
)
def test_constructor_rejects_bad_secrets(make_tokens, access, refresh):
    with pytest.raises(ValueError):
        make_tokens(access_secret=access, refresh_secret=refresh)


def test_from_settings_uses_configured_ttls(repo, db_env):
    svc = TokenService.from_settings(repo, db_env)
    assert svc.access_ttl == timedelta(seconds=db_env.access_token_ttl_seconds)
    assert svc.refresh_ttl == timedelta(seconds=db_env.refresh_token_ttl_seconds)


def _millisecond_clock():
    start = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(minutes=5)
    ticks = iter(range(1000))
    return lambda: start + timedelta(milliseconds=next(ticks))


def test_pairs_within_one_second_differ(make_tokens):
    svc = make_tokens(_millisecond_clock())
    first = svc.generate_token_pair(PROFILE)
    second = svc.generate_token_pair(PROFILE)

    assert first.refresh_token != second.refresh_token
    assert svc.verify_refresh_token(second.refresh_token) == PROFILE


def test_same_clock_reading_signs_identically(make_tokens):
    instant = datetime.now(timezone.utc) - timedelta(minutes=1)
    svc = make_tokens(lambda: instant)
    assert svc.generate_token_pair(PROFILE) == svc.generate_token_pair(PROFILE)


def test_login_in_the_same_second_supersedes_previous_session(db_env, repo, mailer, make_tokens):
    auth = build_services(db_env, repository=repo, mailer=mailer, tokens=make_tokens(_millisecond_clock())).auth
    auth.registration("user@x.com", "secret1", "Ann", "Lee", "+1000")
    auth.activate(mailer.activation_link_for("user@x.com"))

    first = auth.login("user@x.com", "secret1")
    second = auth.login("user@x.com", "secret1")

    assert first.refresh_token != second.refresh_token
    assert auth.refresh(first.refresh_token).kind.value == "User not authorized"
    assert auth.refresh(second.refresh_token).access_token
