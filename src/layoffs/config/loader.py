"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Minimal configs only need: project, data.raw_layoffs
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from layoffs.config.settings import (
    CleaningConfig,
    DataPathsConfig,
    OutputConfig,
    PipelineConfig,
    ReportingConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def _drop_unset(data: dict[str, Any]) -> dict[str, Any]:
    """Remove None values so model defaults apply."""
    return {k: v for k, v in data.items() if v is not None}


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> PipelineConfig:
    """
    Load pipeline configuration from YAML file(s).

    Minimal config requires only:
        - project: str
        - data.raw_layoffs: path

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated PipelineConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        # base.yaml next to the config is picked up automatically
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base.resolve() != config_path.resolve():
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    project = merged.get("project")
    if not project:
        msg = "Config must specify 'project' name"
        raise ValueError(msg)

    data_data = merged.get("data", {})
    raw_layoffs = data_data.get("raw_layoffs")
    if not raw_layoffs:
        msg = "Config must specify 'data.raw_layoffs'"
        raise ValueError(msg)

    data_paths = DataPathsConfig(
        data_root=Path(data_data.get("root", "./data")),
        raw_layoffs=Path(raw_layoffs),
        encoding=data_data.get("encoding", "utf-8"),
    )

    cleaning_data = merged.get("cleaning", {})
    cleaning = CleaningConfig(
        **_drop_unset(
            {
                "measure_sentinel": cleaning_data.get("measure_sentinel"),
                "text_sentinel": cleaning_data.get("text_sentinel"),
                "date_format": cleaning_data.get("date_format"),
                "date_sentinel": cleaning_data.get("date_sentinel"),
                "trim_columns": cleaning_data.get("trim_columns"),
                "industry_prefixes": cleaning_data.get("industry_prefixes"),
                "country_prefixes": cleaning_data.get("country_prefixes"),
                "backfill_keys": cleaning_data.get("backfill_keys"),
            }
        )
    )

    reporting_data = merged.get("reporting", {})
    reporting = ReportingConfig(
        top_n=reporting_data.get("top_n", 5),
        plots=reporting_data.get("plots", True),
    )

    output_data = merged.get("output", {})
    output = OutputConfig(
        output_root=Path(output_data.get("root", "./output")),
    )

    return PipelineConfig(
        project=project,
        data_paths=data_paths,
        cleaning=cleaning,
        reporting=reporting,
        output=output,
    )
