import pytest

from csvhelper.config import MarshalConfig, Settings, ValidationConfig, load_settings


def test_defaults_without_sources(monkeypatch):
    for name in (
        "CSVHELPER_SKIP_VALIDATION",
        "CSVHELPER_REQUIRE_HEADER_VALUES",
        "CSVHELPER_DELIMITER",
        "CSVHELPER_STRICT_FIELD_COUNT",
        "CSVHELPER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    loaded = load_settings(None, {})

    assert loaded.settings == Settings()
    assert loaded.sources_used == []


def test_priority_overrides_over_env_over_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yml"
    cfg.write_text(
        "\n".join([
            "skip_validation: false",
            "require_header_values: true",
            'delimiter: "|"',
            "log_level: DEBUG",
        ]),
        encoding="utf-8",
    )

    # ENV overrides config
    monkeypatch.setenv("CSVHELPER_DELIMITER", ";")
    monkeypatch.setenv("CSVHELPER_SKIP_VALIDATION", "yes")
    monkeypatch.setenv("CSVHELPER_STRICT_FIELD_COUNT", "0")

    # overrides win over env
    loaded = load_settings(str(cfg), {"delimiter": "\t", "log_level": None})
    s = loaded.settings

    assert s.delimiter == "\t"
    assert s.skip_validation is True
    assert s.strict_field_count is False
    assert s.require_header_values is True
    assert s.log_level == "DEBUG"
    assert loaded.sources_used == ["config", "env", "overrides"]


def test_missing_or_non_mapping_config_is_ignored(tmp_path):
    listing = tmp_path / "list.yml"
    listing.write_text("- a\n- b\n", encoding="utf-8")

    assert load_settings(str(tmp_path / "absent.yml"), {}).sources_used == []
    assert load_settings(str(listing), {}).settings.delimiter == ","


def test_invalid_boolean_env_is_rejected(monkeypatch):
    monkeypatch.setenv("CSVHELPER_SKIP_VALIDATION", "maybe")

    with pytest.raises(ValueError):
        load_settings(None, {})


def test_invalid_delimiter_and_unknown_override_are_rejected():
    with pytest.raises(ValueError):
        load_settings(None, {"delimiter": ";;"})
    with pytest.raises(ValueError):
        load_settings(None, {"no_such_setting": True})


def test_settings_build_configs():
    s = Settings(skip_validation=True, require_header_values=True)

    assert s.marshal_config() == MarshalConfig(skip_validation=True)
    assert s.validation_config() == ValidationConfig(skip_validation=False, require_header_values=True)
    assert s.validation_config(skip_validation=True).skip_validation is True
