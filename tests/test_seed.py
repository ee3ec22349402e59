"""Tests for the dev seed helpers and CLI guard."""
import re

import pytest
from pymongo.database import Database
from sqlalchemy.orm import Session

import run_seed
from bookmark_api.models.user import User
from bookmark_api.seed.bookmarks_seed import seed_bookmarks
from bookmark_api.seed.users_seed import seed_users


def test_seed_users_is_idempotent(db_session: Session) -> None:
    created = seed_users(db_session, num_users=3)
    assert [u.username for u in created] == ["user_0001", "user_0002", "user_0003"]

    assert seed_users(db_session, num_users=3) == []
    assert db_session.query(User).count() == 3


def test_seed_bookmarks_pass_title_rule(mongo_db: Database) -> None:
    inserted = seed_bookmarks(mongo_db, owner_ids=[1, 2], per_user=4)
    assert inserted == 8

    docs = list(mongo_db["bookmarks"].find())
    assert {d["owner"] for d in docs} == {1, 2}
    assert all(re.fullmatch(r"[a-z0-9]+", d["title"]) for d in docs)


def test_seed_bookmarks_without_users(mongo_db: Database) -> None:
    assert seed_bookmarks(mongo_db, owner_ids=[]) == 0


def test_check_environment_refuses_outside_dev(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(run_seed.settings, "app_env", "prod")
    with pytest.raises(SystemExit):
        run_seed.check_environment()
    run_seed.check_environment(force=True)
