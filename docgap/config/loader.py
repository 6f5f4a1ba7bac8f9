"""YAML/JSON config loading with env var expansion."""

import json
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from docgap.errors import ConfigError

from .models import DocGapConfig

# Tried in order under the project root when no explicit path is given
CONFIG_FILENAMES = (".docgap.yaml", ".docgap.yml", "docgap.config.json")


def find_config(root: str | Path = ".") -> Path | None:
    """Return the first default config file present under *root*, if any."""
    root = Path(root)
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(root: str | Path = ".", config_path: str | Path | None = None) -> DocGapConfig:
    """Load config with resolution order: explicit path > .docgap.yaml > .docgap.yml > docgap.config.json."""
    root = Path(root)
    if config_path is not None:
        path = Path(config_path)
        if not path.is_absolute():
            path = root / path
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = find_config(root)
        if path is None:
            names = ", ".join(CONFIG_FILENAMES)
            raise ConfigError(f"No config file found in {root} (looked for {names})")
    return load_config_from_path(path)


def load_config_from_path(path: str | Path) -> DocGapConfig:
    """Parse and validate a single config file. JSON if it ends in .json, YAML otherwise."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    try:
        if path.suffix == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if raw is None:
        raise ConfigError(f"Config file {path} is empty")
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    raw = _expand_env_vars(raw)
    try:
        return DocGapConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `docgap config init`
DEFAULT_CONFIG_TEMPLATE = """\
# .docgap.yaml

# Paths never considered as documentation or source (directory names or globs)
ignore:
  - node_modules
  - dist
  - .git

# Each rule pairs documentation with the code it describes
rules:
  - doc: "README.md"
    source: "src/**/*.py"
    # ignore: ["src/**/test_*.py"]
    # max_staleness: 0           # grace period in days

# History filtering
git:
  ignore_commit_patterns:        # commits whose message matches are not "real" changes
    - "^chore:"
    - "^style:"
    - "^test:"
    - "^ci:"
    - "^docs:"
  shallow: true                  # false follows renames through full history

# Semantic verification
semantic:
  enabled: true
  strict: false                  # true reports every newer commit without comparing content
  normalizer: "regex"            # regex | external
  # external_command: ["repomix", "--compress", "--style", "xml"]
  # timeout: 30

# Maximum checks in flight at once
concurrency: 10

# Logging
log_level: "info"                # debug | info | warn | error
log_format: "text"               # text | json
"""
