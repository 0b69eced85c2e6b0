import pytest

from crimecat.config import Settings, split_csv
from tests.fakes import make_settings


def test_defaults_validate() -> None:
    cfg = make_settings()
    cfg.validate_for_boot()
    assert cfg.prefix == "!"
    assert cfg.commands_allow is None
    assert cfg.commands_deny is None


def test_env_aliases(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOT_PREFIX", " ?? ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("BACKEND_API_BASE", "https://api.crimecat.test/")
    monkeypatch.setenv("DISCORD_GUILD_ID", "")
    monkeypatch.setenv("DISCORD_COMMANDS_DENY", "deploy, reply,,")

    cfg = Settings(_env_file=None)

    assert cfg.prefix == "??"
    assert cfg.log_level == "DEBUG"
    assert cfg.backend_api_base == "https://api.crimecat.test"
    assert cfg.discord_guild_id is None
    assert cfg.commands_deny == ["deploy", "reply"]


def test_split_csv() -> None:
    assert split_csv("") == []
    assert split_csv(" a , b ,, c ") == ["a", "b", "c"]


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"backend_api_base": "ftp://backend"}, "BACKEND_API_BASE"),
        ({"log_level": "chatty"}, "LOG_LEVEL"),
        ({"prefix": "!!!!!!!!!"}, "BOT_PREFIX"),
        ({"prefix": "a b"}, "BOT_PREFIX"),
        ({"http_timeout_s": 0}, "HTTP_TIMEOUT"),
        ({"discord_guild_id": -5}, "DISCORD_GUILD_ID"),
        ({"bot_list_interval_s": 10}, "BOT_LIST_INTERVAL"),
        ({"ad_rotation_interval_s": 1}, "AD_ROTATION_INTERVAL"),
        ({"bot_list_token": "t", "bot_list_api_base": "not-a-url"}, "BOT_LIST_API_BASE"),
    ],
)
def test_validate_for_boot_rejects(overrides: dict, message: str) -> None:
    with pytest.raises(RuntimeError, match=message):
        make_settings(**overrides).validate_for_boot()


def test_missing_token_is_not_a_validation_error() -> None:
    make_settings(discord_bot_token="").validate_for_boot()
