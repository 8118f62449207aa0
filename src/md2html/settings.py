from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from md2html.domain.models import RenderSettings


class RenderSettingsError(RuntimeError):
    pass


def global_config_path() -> Path:
    override = os.environ.get("MD2HTML_CONFIG")
    if override:
        return Path(override).expanduser()
    root = os.environ.get("XDG_CONFIG_HOME")
    if root:
        base = Path(root)
    else:
        base = Path.home() / ".config"
    return base / "md2html" / "config.yaml"


def load_render_settings(*, config_path: Path | None = None) -> RenderSettings:
    """Load settings from ``config_path``, ``$MD2HTML_CONFIG`` or the XDG default.

    A file named explicitly (option or environment) must exist; the XDG
    default is optional.
    """
    explicit = config_path is not None or bool(os.environ.get("MD2HTML_CONFIG"))
    path = config_path if config_path is not None else global_config_path()
    if not path.exists():
        if explicit:
            raise RenderSettingsError(f"Config file not found: {path}")
        return RenderSettings()

    data = _load_yaml_mapping(path)
    try:
        return RenderSettings.model_validate(data)
    except ValidationError as exc:
        raise RenderSettingsError(f"Invalid config at {path}: {exc}") from exc


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RenderSettingsError(f"Could not read config {path}: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise RenderSettingsError(f"Invalid YAML at {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise RenderSettingsError(f"Expected mapping YAML at {path}")
    return dict(loaded)
