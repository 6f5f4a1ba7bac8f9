"""Tests for docgap.config - models and YAML/JSON loader."""

import json
import os
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from docgap.config.loader import (
    DEFAULT_CONFIG_TEMPLATE,
    _expand_env_vars,
    find_config,
    load_config,
    load_config_from_path,
)
from docgap.config.models import DocGapConfig, GitConfig, RuleConfig, SemanticConfig
from docgap.errors import ConfigError


# ── DocGapConfig defaults ───────────────────────────────────────────


class TestDocGapConfigDefaults:
    def test_default_ignore(self, sample_config):
        assert sample_config.ignore == ["node_modules", "dist", ".git"]

    def test_default_commit_patterns(self, sample_config):
        assert sample_config.git.ignore_commit_patterns == ["^chore:", "^style:", "^test:", "^ci:", "^docs:"]

    def test_default_shallow(self, sample_config):
        assert sample_config.git.shallow is True

    def test_default_semantic(self, sample_config):
        assert sample_config.semantic.enabled is True
        assert sample_config.semantic.strict is False
        assert sample_config.semantic.normalizer == "regex"
        assert sample_config.semantic.external_command[0] == "repomix"

    def test_default_concurrency(self, sample_config):
        assert sample_config.concurrency == 10

    def test_default_logging(self, sample_config):
        assert sample_config.log_level == "info"
        assert sample_config.log_format == "text"

    def test_rules_required(self):
        with pytest.raises(ValidationError):
            DocGapConfig()

    def test_frozen(self, sample_config):
        with pytest.raises(ValidationError):
            sample_config.concurrency = 3


# ── Individual config model validations ─────────────────────────────


class TestRuleConfig:
    def test_single_source(self):
        assert RuleConfig(doc="a.md", source="src/*.py").source_patterns == ["src/*.py"]

    def test_source_list(self):
        rule = RuleConfig(doc="a.md", source=["a/*.py", "b/*.py"])
        assert rule.source_patterns == ["a/*.py", "b/*.py"]

    def test_camel_case_alias(self):
        rule = RuleConfig.model_validate({"doc": "a.md", "source": "x", "maxStaleness": 5})
        assert rule.max_staleness == 5

    def test_negative_staleness_rejected(self):
        with pytest.raises(ValidationError):
            RuleConfig(doc="a.md", source="x", max_staleness=-1)

    @pytest.mark.parametrize(
        "doc,source",
        [("/abs/README.md", "src/*.py"), ("README.md", "/abs/src/*.py"), ("README.md", ["src/*.py", "C:/x/*.py"])],
    )
    def test_absolute_pattern_rejected(self, doc, source):
        with pytest.raises(ValidationError, match="relative to the project root"):
            RuleConfig(doc=doc, source=source)

    def test_empty_doc_rejected(self):
        with pytest.raises(ValidationError):
            RuleConfig(doc="", source="x")


class TestGitConfig:
    def test_camel_case_alias(self):
        cfg = GitConfig.model_validate({"ignoreCommitPatterns": ["^wip"], "shallow": False})
        assert cfg.ignore_commit_patterns == ["^wip"]
        assert cfg.shallow is False


class TestSemanticConfig:
    def test_invalid_normalizer_rejected(self):
        with pytest.raises(ValidationError):
            SemanticConfig(normalizer="ast")

    def test_external_command_alias(self):
        cfg = SemanticConfig.model_validate({"normalizer": "external", "externalCommand": ["tool", "-x"]})
        assert cfg.external_command == ["tool", "-x"]

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            SemanticConfig(timeout=0)


class TestTopLevelValidation:
    def test_concurrency_must_be_positive(self):
        with pytest.raises(ValidationError):
            DocGapConfig(rules=[], concurrency=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            DocGapConfig(rules=[], log_level="verbose")

    def test_camel_case_logging(self):
        cfg = DocGapConfig.model_validate({"rules": [], "logLevel": "debug", "logFormat": "json"})
        assert cfg.log_level == "debug"
        assert cfg.log_format == "json"


# ── Env var expansion ───────────────────────────────────────────────


class TestExpandEnvVars:
    def test_expands_string_variable(self):
        with patch.dict(os.environ, {"DOCGAP_SRC": "lib"}):
            assert _expand_env_vars("${DOCGAP_SRC}/**/*.py") == "lib/**/*.py"

    def test_missing_var_becomes_empty(self):
        env = {k: v for k, v in os.environ.items() if k != "DOCGAP_NOPE"}
        with patch.dict(os.environ, env, clear=True):
            assert _expand_env_vars("a${DOCGAP_NOPE}b") == "ab"

    def test_expands_nested_structures(self):
        with patch.dict(os.environ, {"A": "alpha", "B": "beta"}):
            result = _expand_env_vars({"x": ["${A}", {"y": "${B}"}]})
        assert result == {"x": ["alpha", {"y": "beta"}]}

    def test_non_string_passthrough(self):
        assert _expand_env_vars({"n": 3, "b": True, "z": None}) == {"n": 3, "b": True, "z": None}


# ── load_config ─────────────────────────────────────────────────────


class TestLoadConfig:
    def test_loads_yaml(self, tmp_path):
        (tmp_path / ".docgap.yaml").write_text(
            "rules:\n  - doc: README.md\n    source: ['src/*.ts', 'lib/*.ts']\n    maxStaleness: 2\n"
            "semantic:\n  strict: true\n"
        )
        cfg = load_config(tmp_path)
        assert cfg.rules[0].source_patterns == ["src/*.ts", "lib/*.ts"]
        assert cfg.rules[0].max_staleness == 2
        assert cfg.semantic.strict is True
        assert cfg.concurrency == 10

    def test_loads_json(self, tmp_path):
        data = {"rules": [{"doc": "README.md", "source": "src/*.ts"}], "concurrency": 4}
        (tmp_path / "docgap.config.json").write_text(json.dumps(data))
        cfg = load_config(tmp_path)
        assert cfg.concurrency == 4

    def test_resolution_order(self, tmp_path):
        (tmp_path / "docgap.config.json").write_text(json.dumps({"rules": [], "concurrency": 3}))
        (tmp_path / ".docgap.yml").write_text("rules: []\nconcurrency: 2\n")
        assert load_config(tmp_path).concurrency == 2

        (tmp_path / ".docgap.yaml").write_text("rules: []\nconcurrency: 1\n")
        assert load_config(tmp_path).concurrency == 1
        assert find_config(tmp_path).name == ".docgap.yaml"

    def test_explicit_path_wins(self, tmp_path):
        (tmp_path / ".docgap.yaml").write_text("rules: []\nconcurrency: 1\n")
        (tmp_path / "ci.yaml").write_text("rules: []\nconcurrency: 7\n")
        assert load_config(tmp_path, "ci.yaml").concurrency == 7
        assert load_config(tmp_path, tmp_path / "ci.yaml").concurrency == 7

    def test_env_expansion_in_file(self, tmp_path):
        (tmp_path / ".docgap.yaml").write_text("rules:\n  - doc: README.md\n    source: '${DOCGAP_DIR}/*.py'\n")
        with patch.dict(os.environ, {"DOCGAP_DIR": "pkg"}):
            cfg = load_config(tmp_path)
        assert cfg.rules[0].source == "pkg/*.py"

    def test_missing_file(self, tmp_path):
        assert find_config(tmp_path) is None
        with pytest.raises(ConfigError, match="No config file found"):
            load_config(tmp_path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path, "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / ".docgap.yaml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_from_path(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "docgap.config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config_from_path(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / ".docgap.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="empty"):
            load_config_from_path(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / ".docgap.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config_from_path(path)

    def test_validation_error(self, tmp_path):
        path = tmp_path / ".docgap.yaml"
        path.write_text("rules:\n  - source: src/*.py\n")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config_from_path(path)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestDefaultTemplate:
    def test_template_is_valid_config(self):
        cfg = DocGapConfig.model_validate(yaml.safe_load(DEFAULT_CONFIG_TEMPLATE))
        assert cfg.rules[0].doc == "README.md"
        assert cfg.git.ignore_commit_patterns == GitConfig().ignore_commit_patterns
        assert cfg.semantic == SemanticConfig()
