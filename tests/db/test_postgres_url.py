"""Tests for the users-table connection URL."""
from bookmark_api.core.settings import Settings
from bookmark_api.db.postgres import postgres_url


def test_postgres_url_from_settings() -> None:
    settings = Settings(
        POSTGRES_HOST="db.internal",
        POSTGRES_PORT=6543,
        POSTGRES_USER="reader",
        POSTGRES_PASSWORD="p@ss:w/rd",
        POSTGRES_DB="accounts",
    )
    url = postgres_url(settings)
    assert url.drivername == "postgresql+psycopg2"
    assert url.host == "db.internal"
    assert url.port == 6543
    assert url.username == "reader"
    # 특수문자는 URL 문자열에서 escape되고 원래 값은 그대로 유지
    assert url.password == "p@ss:w/rd"
    assert url.database == "accounts"
    assert "p@ss:w/rd" not in url.render_as_string(hide_password=False)


def test_postgres_url_without_password() -> None:
    url = postgres_url(Settings(POSTGRES_PASSWORD=""))
    assert url.password is None
