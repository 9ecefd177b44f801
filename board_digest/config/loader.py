from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Configuration loading.

Responsibilities:
- Load the YAML config (default config/board_digest.yml)
- Validate it against the bundled config_schema.json
- Apply defaults for every optional key

PipelineConfig() alone gives the defaults, so library callers never need a
config file.
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/board_digest.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class PipelineConfig:
    """Knobs for normalization, board classification and rendering."""
    null_sentinels: frozenset[str] = frozenset({"#VALUE!"})  # upper-cased
    identity_titles: tuple[str, ...] = ("Name",)
    numeric_keywords: tuple[str, ...] = ("amount", "value", "billed", "collected", "receivable")
    date_keywords: tuple[str, ...] = ("date",)
    pipeline_keywords: tuple[str, ...] = ("deal", "deal stage", "closure")
    execution_keywords: tuple[str, ...] = ("execution", "billed", "serial")
    top_n: int = 20
    generic_column_limit: int = 8
    currency_symbol: str = "₹"


@dataclass(frozen=True)
class DigestConfig:
    source_directory: str
    output_path: str | None = None
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or if the
            config data violates it (missing keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _lowered(values: list[str] | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if values is None:
        return default
    return tuple(v.strip().lower() for v in values)


def build_pipeline_config(data: dict[str, Any]) -> PipelineConfig:
    """Build a PipelineConfig from an already validated config mapping."""
    defaults = PipelineConfig()
    sentinels = data.get("null_sentinels")
    identity = data.get("identity_titles")
    return PipelineConfig(
        null_sentinels=(
            frozenset(s.strip().upper() for s in sentinels)
            if sentinels is not None
            else defaults.null_sentinels
        ),
        identity_titles=tuple(identity) if identity is not None else defaults.identity_titles,
        numeric_keywords=_lowered(data.get("numeric_keywords"), defaults.numeric_keywords),
        date_keywords=_lowered(data.get("date_keywords"), defaults.date_keywords),
        pipeline_keywords=_lowered(data.get("pipeline_keywords"), defaults.pipeline_keywords),
        execution_keywords=_lowered(data.get("execution_keywords"), defaults.execution_keywords),
        top_n=data.get("top_n", defaults.top_n),
        generic_column_limit=data.get("generic_column_limit", defaults.generic_column_limit),
        currency_symbol=data.get("currency_symbol", defaults.currency_symbol),
    )


def load_config(path: Path) -> DigestConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    return DigestConfig(
        source_directory=data["source_directory"],
        output_path=data.get("output_path"),
        pipeline=build_pipeline_config(data),
    )
