import pytest

from settings import ConfigError, Settings, load_settings

DB_ENV = {
    "DB_USER": "library",
    "DB_PASSWORD": "s3cret",
    "DB_NAME": "books",
    "DB_PORT": "5432",
    "DB_HOST": "localhost",
}


def test_defaults():
    settings = Settings({})
    assert settings.BOOK_STORE == "database"
    assert settings.HOST == "0.0.0.0"
    assert settings.listen_port() == 8080
    assert settings.DB_ECHO is False
    assert settings.LOG_LEVEL == "INFO"


def test_postgres_url_from_parts():
    url = Settings(DB_ENV).database_url()
    assert url.drivername == "postgresql+psycopg2"
    assert (url.username, url.password, url.database) == ("library", "s3cret", "books")
    assert (url.host, url.port) == ("localhost", 5432)
    assert url.query["sslmode"] == "disable"


def test_missing_db_vars_are_named():
    env = dict(DB_ENV)
    del env["DB_PASSWORD"]
    del env["DB_HOST"]
    with pytest.raises(ConfigError, match="DB_PASSWORD, DB_HOST"):
        Settings(env).database_url()


def test_database_url_override_skips_parts():
    assert Settings({"DATABASE_URL": "sqlite://"}).database_url() == "sqlite://"


def test_bad_port_values():
    with pytest.raises(ConfigError):
        Settings({**DB_ENV, "DB_PORT": "pg"}).database_url()
    with pytest.raises(ConfigError):
        Settings({"PORT": "http"}).listen_port()


def test_load_settings_reads_env_file(tmp_path, monkeypatch):
    for name in list(DB_ENV) + ["BOOK_STORE"]:
        # set then delete so teardown also removes what load_dotenv writes
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("DB_USER=from_file\nBOOK_STORE=memory\n")
    settings = load_settings(env_file)
    assert settings.DB_USER == "from_file"
    assert settings.BOOK_STORE == "memory"
