from pathlib import Path
import json
import re
from typing import Any, Dict

import yaml


def sanitize_filename(name: str) -> str:
    """
    Sanitize a string to be safe for filenames.
    Preserves Japanese characters but removes slashes, colons, etc.
    """
    # Remove chars invalid in Windows/Mac/Linux filenames
    safe = re.sub(r'[\\/*?:"<>|]', '_', name)
    # Trim whitespace and dots
    safe = safe.strip().strip('.')
    return safe


def load_yaml_mapping(path: Path) -> Dict[str, Any]:
    """Load a YAML file whose top level is a mapping. Missing file -> {}."""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        return {}
    return data


def load_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: Any):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def write_text(path: Path, text: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
