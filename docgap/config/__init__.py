from .loader import (
    CONFIG_FILENAMES,
    DEFAULT_CONFIG_TEMPLATE,
    find_config,
    load_config,
    load_config_from_path,
)
from .models import DocGapConfig, GitConfig, RuleConfig, SemanticConfig

__all__ = [
    "CONFIG_FILENAMES",
    "DEFAULT_CONFIG_TEMPLATE",
    "DocGapConfig",
    "GitConfig",
    "RuleConfig",
    "SemanticConfig",
    "find_config",
    "load_config",
    "load_config_from_path",
]
