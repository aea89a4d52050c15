from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import yaml


@dataclass(frozen=True)
class ValidationConfig:
    skip_validation: bool = False
    require_header_values: bool = False


@dataclass(frozen=True)
class MarshalConfig:
    skip_validation: bool = False


@dataclass(frozen=True)
class Settings:
    # Validation
    skip_validation: bool = False
    require_header_values: bool = False

    # Reader
    delimiter: str = ","
    strict_field_count: bool = True

    # Misc
    log_level: str = "WARN"

    def marshal_config(self) -> MarshalConfig:
        return MarshalConfig(skip_validation=self.skip_validation)

    def validation_config(self, skip_validation: bool = False) -> ValidationConfig:
        return ValidationConfig(
            skip_validation=skip_validation,
            require_header_values=self.require_header_values,
        )


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


def _read_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None:
        return None
    # "\t" is a valid delimiter
    if name == "CSVHELPER_DELIMITER":
        return v or None
    if v.strip() == "":
        return None
    return v.strip()


def parse_bool(v: str | bool | None) -> bool | None:
    if v is None:
        return None
    if isinstance(v, bool):
        return v
    vv = v.strip().lower()
    if vv in ("1", "true", "yes", "y"):
        return True
    if vv in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"Invalid boolean value: {v}")


def load_settings(
    config_path: str | None,
    overrides: dict | None = None,
) -> LoadedSettings:
    """
    Priority: overrides > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()
    overrides = overrides or {}

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    # 2) env
    env = {
        "skip_validation": _env_get("CSVHELPER_SKIP_VALIDATION"),
        "require_header_values": _env_get("CSVHELPER_REQUIRE_HEADER_VALUES"),
        "delimiter": _env_get("CSVHELPER_DELIMITER"),
        "strict_field_count": _env_get("CSVHELPER_STRICT_FIELD_COUNT"),
        "log_level": _env_get("CSVHELPER_LOG_LEVEL"),
    }
    if any(v is not None for v in env.values()):
        sources.append("env")

    # merge config -> env -> overrides
    merged = {
        "skip_validation": cfg.get("skip_validation", defaults.skip_validation),
        "require_header_values": cfg.get("require_header_values", defaults.require_header_values),
        "delimiter": cfg.get("delimiter", defaults.delimiter),
        "strict_field_count": cfg.get("strict_field_count", defaults.strict_field_count),
        "log_level": cfg.get("log_level", defaults.log_level),
    }

    # apply env
    if env["skip_validation"] is not None:
        merged["skip_validation"] = parse_bool(env["skip_validation"])
    if env["require_header_values"] is not None:
        merged["require_header_values"] = parse_bool(env["require_header_values"])
    if env["delimiter"] is not None:
        merged["delimiter"] = env["delimiter"]
    if env["strict_field_count"] is not None:
        merged["strict_field_count"] = parse_bool(env["strict_field_count"])
    if env["log_level"] is not None:
        merged["log_level"] = env["log_level"]

    # 3) apply overrides (only those explicitly passed)
    if any(v is not None for v in overrides.values()):
        sources.append("overrides")

    for k, v in overrides.items():
        if v is None:
            continue
        if k not in merged:
            raise ValueError(f"Unknown setting: {k}")
        merged[k] = v

    delimiter = str(merged["delimiter"])
    if len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")

    settings = Settings(
        skip_validation=bool(parse_bool(merged["skip_validation"])),
        require_header_values=bool(parse_bool(merged["require_header_values"])),
        delimiter=delimiter,
        strict_field_count=bool(parse_bool(merged["strict_field_count"])),
        log_level=str(merged["log_level"]),
    )

    return LoadedSettings(settings=settings, sources_used=sources)
