"""
Configuration loading utilities.

Config files are YAML. String values may reference environment
variables as ${VAR} or ${VAR:default}, which lets the source URLs be
pointed at local mirrors without editing the file. A base.yaml next to
the config, if present, is merged underneath it. An empty config file is
valid: every section has defaults pointing at the public datasets.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from auclimate.config.settings import (
    AnalysisConfig,
    CleaningConfig,
    OutputConfig,
    ReportConfig,
    ReportPipelineConfig,
    SourcesConfig,
)

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")

_SECTIONS = ("sources", "cleaning", "analysis", "output", "report")


def _expand_env(value: Any) -> Any:
    """Substitute environment references in every string of a YAML tree."""
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(
            lambda m: os.environ.get(m["name"], m["default"] or ""), value
        )
    if isinstance(value, dict):
        return {key: _expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    return value


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay `override` on `base`; nested sections merge key-wise."""
    merged = dict(base)
    for key, value in override.items():
        below = merged.get(key)
        if isinstance(below, dict) and isinstance(value, dict):
            merged[key] = _merge(below, value)
        else:
            merged[key] = value
    return merged


def load_yaml(path: Path) -> dict[str, Any]:
    """
    Read one YAML config file with environment references expanded.

    Raises:
        ValueError: If the document root is not a mapping.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config root must be a mapping: {path}"
        raise ValueError(msg)
    return _expand_env(data)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        msg = f"Config section '{name}' must be a mapping, got {type(section).__name__}"
        raise ValueError(msg)
    return section


def default_config(project: str = "au-climate") -> ReportPipelineConfig:
    """Build a configuration without a file, using the public data sources."""
    return ReportPipelineConfig(project=project)


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> ReportPipelineConfig:
    """
    Load run configuration from YAML file(s).

    Recognized top-level keys: project, sources, cleaning, analysis,
    output (with `root`), report. Missing sections fall back to defaults.

    Args:
        config_path: Path to the main configuration file.
        base_path: Configuration merged underneath the main file. Defaults
            to a base.yaml next to the main file, if present.

    Returns:
        Fully validated ReportPipelineConfig instance.

    Raises:
        ValueError: On malformed YAML structure or invalid values
            (pydantic's ValidationError is a ValueError).
    """
    if base_path is None:
        sibling = config_path.parent / "base.yaml"
        if sibling.exists() and sibling.resolve() != config_path.resolve():
            base_path = sibling

    data = load_yaml(config_path)
    if base_path is not None:
        data = _merge(load_yaml(base_path), data)

    sections = {name: _section(data, name) for name in _SECTIONS}
    output_root = sections["output"].get("root", OutputConfig().output_root)

    return ReportPipelineConfig(
        project=data.get("project", "au-climate"),
        sources=SourcesConfig(**sections["sources"]),
        cleaning=CleaningConfig(**sections["cleaning"]),
        analysis=AnalysisConfig(**sections["analysis"]),
        output=OutputConfig(output_root=Path(output_root)),
        report=ReportConfig(**sections["report"]),
    )
