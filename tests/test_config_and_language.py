"""Settings loading and language constants."""

import pytest

from eansearch.core import config
from eansearch.core.config import AppSettings, write_user_env_vars
from eansearch.core.domain.language import Language


def test_token_from_environment(monkeypatch):
    monkeypatch.setenv("EAN_SEARCH_API_TOKEN", "secret")

    assert AppSettings().api_token == "secret"


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nEAN_SEARCH_LOG_LEVEL='DEBUG'\n", encoding="utf-8")

    write_user_env_vars({"EAN_SEARCH_API_TOKEN": "abc"}, env_path=env_path)

    assert config._parse_env_lines(env_path.read_text(encoding="utf-8")) == {
        "EAN_SEARCH_API_TOKEN": "abc",
        "EAN_SEARCH_LOG_LEVEL": "DEBUG",
    }


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr(config.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert config.get_user_env_file() == tmp_path / "eansearch" / ".env"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ENGLISH", 1),
        ("DANISH", 2),
        ("GERMAN", 3),
        ("SPANISH", 4),
        ("FINISH", 5),
        ("FRENCH", 6),
        ("ITALIAN", 8),
        ("DUTCH", 10),
        ("NORWEGIAN", 11),
        ("POLISH", 12),
        ("PORTUGUESE", 13),
        ("SWEDISH", 15),
        ("ANY", 99),
    ],
)
def test_language_ids(name, value):
    assert Language[name] == value


def test_language_parse():
    assert Language.parse("german") is Language.GERMAN
    assert Language.parse("99") is Language.ANY
    assert Language.parse("finnish") is Language.FINISH
    assert Language.default() is Language.ENGLISH
    with pytest.raises(ValueError):
        Language.parse("klingon")


def test_project_env_file_is_read_last():
    env_files = AppSettings.model_config["env_file"]

    assert env_files[-1] == ".env"
    assert env_files[0] == str(config.get_user_env_file())
