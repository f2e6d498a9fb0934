"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from alumni_api.core.errors import DuplicateEmailError


def _user(repo, email, **extra):
    fields = {"password_hash": "hash", "name": "Ann", "surname": "Lee", "phone_number": "1"}
    fields.update(extra)
    return repo.create_user(email=email, **fields)


def test_user_lookup_and_save(repo):
    created = _user(repo, "alice@x.com", activation_link="link-1")
    assert repo.find_user_by_email("alice@x.com").id == created.id
    assert repo.find_user_by_id(created.id).email == "alice@x.com"
    assert repo.find_user_by_activation_link("link-1").id == created.id
    assert repo.find_user_by_activation_link("") is None
    assert repo.find_user_by_id("") is None

    created.is_activated = True
    created.reset_code = 123456
    repo.save_user(created)
    stored = repo.find_user_by_email("alice@x.com")
    assert stored.is_activated is True
    assert stored.reset_code == 123456


def test_duplicate_email_is_refused(repo):
    _user(repo, "alice@x.com")
    with pytest.raises(DuplicateEmailError):
        _user(repo, "alice@x.com")


def test_list_users_filters_and_hides_admins(repo):
    _user(repo, "a@x.com", name="Alice", year_of_release=2020, specialty="CS")
    _user(repo, "b@x.com", name="Bob", year_of_release=2021, specialty="CS")
    _user(repo, "c@x.com", name="Alina", year_of_release=2020, specialty="Math")
    _user(repo, "admin@x.com", name="Alien", is_admin=True)

    total, users = repo.list_users(offset=0, limit=10)
    assert total == 3
    assert "admin@x.com" not in {u.email for u in users}

    total, users = repo.list_users(offset=0, limit=10, filters={"name": "ali"})
    assert total == 2
    assert {u.email for u in users} == {"a@x.com", "c@x.com"}

    total, users = repo.list_users(offset=0, limit=10, filters={"year_of_release": 2020, "specialty": "CS"})
    assert total == 1
    assert users[0].email == "a@x.com"

    total, users = repo.list_users(offset=2, limit=2)
    assert total == 3
    assert len(users) == 1


def test_refresh_token_upsert_and_delete(repo):
    user = _user(repo, "alice@x.com")
    repo.upsert_refresh_token(user.id, "tok-1")
    repo.upsert_refresh_token(user.id, "tok-2")

    assert repo.find_refresh_token("tok-1") is None
    assert repo.find_refresh_token("tok-2").user_id == user.id
    assert repo.find_refresh_token_by_user(user.id).refresh_token == "tok-2"

    repo.delete_refresh_token("tok-2")
    assert repo.find_refresh_token_by_user(user.id) is None


def test_news_listing_is_newest_first(repo):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for idx in range(3):
        repo.create_news(
            title=f"n{idx}",
            poster=f"p{idx}.png",
            short_describe="short",
            content=[{"title": "t", "paragraph": "p"}],
            created_at=base + timedelta(days=idx),
        )

    total, items = repo.list_news(offset=0, limit=2)
    assert total == 3
    assert [n.title for n in items] == ["n2", "n1"]

    total, items = repo.list_news(offset=2, limit=2)
    assert [n.title for n in items] == ["n0"]


def test_news_save_and_delete(repo):
    news = repo.create_news(title="t", poster="p.png", short_describe="s", content=[])
    assert news.updated_by == "Not updated yet"
    assert news.news_images == []

    news.title = "changed"
    repo.save_news(news)
    assert repo.get_news(news.id).title == "changed"

    assert repo.delete_news(news.id) is True
    assert repo.delete_news(news.id) is False
    assert repo.get_news(news.id) is None


def test_vacancy_crud(repo):
    vacancy = repo.create_vacancy(
        company_name="Acme",
        company_logo="logo.png",
        salary="1000",
        requirements="python",
        position="dev",
        contacts=[{"whatsapp": "", "telegram": "@acme", "email": ""}],
    )
    assert repo.get_vacancy(vacancy.id).contacts[0]["telegram"] == "@acme"

    total, items = repo.list_vacancies(offset=0, limit=10)
    assert total == 1
    assert items[0].company_name == "Acme"

    vacancy.salary = "2000"
    repo.save_vacancy(vacancy)
    assert repo.get_vacancy(vacancy.id).salary == "2000"

    assert repo.delete_vacancy(vacancy.id) is True
    assert repo.get_vacancy(vacancy.id) is None


def test_create_tables_cli_recreates_schema(repo, capsys):
    from alumni_api.db.create_tables import main

    _user(repo, "alice@x.com")
    main(["--drop"])

    assert "Alumni tables ready." in capsys.readouterr().out
    assert repo.find_user_by_email("alice@x.com") is None
