"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (CRONSHIFT__SECTION__KEY)
3. Project config (.cronshift/config.yaml)
4. Global config (~/.config/cronshift/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from cronshift.config.constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME
from cronshift.config.models import (
    CronShiftConfig,
    EngineConfig,
    LoggingConfig,
    ReportConfig,
)
from cronshift.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/cronshift/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except UnicodeDecodeError as e:
        raise ConfigError.parse_error(str(path), f"not valid UTF-8 at byte {e.start}") from e
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class CronShiftSettings(BaseSettings):
        """Root config. Env vars: CRONSHIFT__LOGGING__LEVEL, CRONSHIFT__ENGINE__MAX_WORKERS, etc."""

        model_config = SettingsConfigDict(
            env_prefix="CRONSHIFT__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        engine: EngineConfig = EngineConfig()
        report: ReportConfig = ReportConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return CronShiftSettings


def load_config(project_root: Path | None = None, **kwargs: Any) -> CronShiftConfig:
    """Load config: defaults < global yaml < project yaml < env vars < kwargs.

    Args:
        project_root: Directory holding .cronshift/config.yaml.
                      Defaults to current working directory.
        **kwargs: Override values (highest precedence), keyed by section.

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()

    yaml_config = _deep_merge(
        _load_yaml(GLOBAL_CONFIG_PATH),
        _load_yaml(project_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME),
    )

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return CronShiftConfig.model_validate(settings.model_dump())


CONFIG_TEMPLATE = """\
# CronShift configuration
# Every key is optional. Environment variables (CRONSHIFT__SECTION__KEY) win
# over this file.

logging:
  # DEBUG, INFO, WARNING, ERROR, CRITICAL
  level: {log_level}

engine:
  # Parallel classification workers (1-64). 1 classifies sequentially.
  max_workers: {max_workers}
  # Timezone attached to schedules that declare none.
  default_timezone: {default_timezone}

report:
  # json, yaml or markdown
  format: {report_format}
  # Group used for generated job and trigger identities.
  job_group: {job_group}
  include_advisories: {include_advisories}
"""


def write_config_template(path: Path, config: CronShiftConfig | None = None) -> None:
    """Write a commented config file populated from config (defaults if None)."""
    cfg = config or CronShiftConfig()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        CONFIG_TEMPLATE.format(
            log_level=cfg.logging.level,
            max_workers=cfg.engine.max_workers,
            default_timezone=cfg.engine.default_timezone,
            report_format=cfg.report.format,
            job_group=cfg.report.job_group,
            include_advisories="true" if cfg.report.include_advisories else "false",
        )
    )
