"""Artifact read/write helpers for nuclidesim JSON/YAML files."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from typing import Any, Dict, Union

PathLike = Union[str, Path]


def _load_yaml_module():
    if importlib.util.find_spec("yaml") is None:
        return None
    import yaml

    return yaml


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _write_text(path: Path, payload: str) -> None:
    path.write_text(payload, encoding="utf-8")


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in {".yml", ".yaml"}


def write_artifact(path: PathLike, payload: Dict[str, Any]) -> Path:
    """Write artifact data as JSON or YAML depending on extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if _is_yaml(path):
        yaml = _load_yaml_module()
        if yaml is None:
            raise ImportError("PyYAML is required to write YAML artifacts.")
        _write_text(path, yaml.safe_dump(payload, sort_keys=False, allow_unicode=True))
    else:
        _write_text(path, json.dumps(payload, indent=2, ensure_ascii=False))
    return path


def read_artifact(path: PathLike) -> Dict[str, Any]:
    """Read artifact data from JSON or YAML."""
    path = Path(path)
    if _is_yaml(path):
        yaml = _load_yaml_module()
        if yaml is None:
            raise ImportError("PyYAML is required to read YAML artifacts.")
        data = yaml.safe_load(_read_text(path))
    else:
        data = json.loads(_read_text(path))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a mapping at the top level")
    return data
