import json

import pytest

from krypto.config import DEFAULTS, load_config
from krypto.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("KRYPTO_KEY", "KRYPTO_SECRET", "KRYPTO_PASSPHRASE", "KRYPTO_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


def write_settings(path, **values):
    path.write_text(json.dumps(values))
    return path


def test_missing_file_is_created_with_placeholders(tmp_path):
    with pytest.raises(ConfigError, match="has not been changed"):
        load_config()
    created = tmp_path / "settings.json"
    assert json.loads(created.read_text()) == DEFAULTS


def test_unmodified_defaults_are_refused(tmp_path):
    write_settings(tmp_path / "settings.json", **DEFAULTS)
    with pytest.raises(ConfigError):
        load_config()


def test_one_placeholder_left_is_refused(tmp_path):
    write_settings(tmp_path / "settings.json", KEY="k", SECRET="c2VjcmV0", PASSPHRASE=DEFAULTS["PASSPHRASE"])
    with pytest.raises(ConfigError):
        load_config()


def test_missing_field_is_refused(tmp_path):
    write_settings(tmp_path / "settings.json", KEY="k", SECRET="c2VjcmV0")
    with pytest.raises(ConfigError):
        load_config()


def test_loads_credentials_from_working_directory(tmp_path):
    write_settings(tmp_path / "settings.json", KEY="k", SECRET="c2VjcmV0", PASSPHRASE="p")
    creds = load_config()
    assert (creds.key, creds.secret, creds.passphrase) == ("k", "c2VjcmV0", "p")


def test_falls_back_to_home_directory(tmp_path):
    home_cfg = tmp_path / "home" / ".krypto" / "settings.json"
    home_cfg.parent.mkdir(parents=True)
    write_settings(home_cfg, KEY="hk", SECRET="c2VjcmV0", PASSPHRASE="hp")
    assert load_config().key == "hk"
    assert not (tmp_path / "settings.json").exists()


def test_explicit_path_via_environment(tmp_path, monkeypatch):
    cfg = write_settings(tmp_path / "custom.json", KEY="ck", SECRET="c2VjcmV0", PASSPHRASE="cp")
    monkeypatch.setenv("KRYPTO_CONFIG", str(cfg))
    assert load_config().key == "ck"


def test_environment_overrides_placeholders(tmp_path, monkeypatch):
    write_settings(tmp_path / "settings.json", **DEFAULTS)
    monkeypatch.setenv("KRYPTO_KEY", "ek")
    monkeypatch.setenv("KRYPTO_SECRET", "c2VjcmV0")
    monkeypatch.setenv("KRYPTO_PASSPHRASE", "ep")
    creds = load_config()
    assert (creds.key, creds.passphrase) == ("ek", "ep")


def test_invalid_json_is_a_config_error(tmp_path):
    (tmp_path / "settings.json").write_text("{oops")
    with pytest.raises(ConfigError, match="error loading config file"):
        load_config()


def test_non_object_json_is_a_config_error(tmp_path):
    (tmp_path / "settings.json").write_text("[]")
    with pytest.raises(ConfigError):
        load_config()


def test_non_string_value_names_the_field(tmp_path):
    write_settings(tmp_path / "settings.json", KEY=123, SECRET="c2VjcmV0", PASSPHRASE="p")
    with pytest.raises(ConfigError, match="KEY .* must be a string"):
        load_config()
