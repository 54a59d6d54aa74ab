"""
Validator Settings

Settings come from, in increasing priority:
1. Defaults below
2. A YAML file (path argument or RULEKIT_CONFIG)
3. Environment variables (a .env file is loaded first)

Example rulekit.yaml:

    strict: false
    accumulate: true
    log_level: INFO
    log_format: json
    enable_metrics: true
    custom_rules:
      slug: myapp.validation:SlugValidationRule
"""

import importlib
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMATS = ("json", "text")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class ValidatorSettings:
    strict: bool = False
    accumulate: bool = True
    log_level: str = "INFO"
    log_format: str = "json"
    enable_metrics: bool = True
    custom_rules: Dict[str, Any] = field(default_factory=dict)


def parse_bool(raw: Any, name: str) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"Setting '{name}' must be a boolean, got {raw!r}")


def import_rule(path: str) -> Any:
    """
    Import a rule class from a "package.module:ClassName" path.

    Raises:
        ConfigurationError: If the module or attribute cannot be found
    """
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(f"Rule path must look like 'package.module:ClassName', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import rule module '{module_name}': {e}") from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(f"Module '{module_name}' has no rule '{attribute}'") from e


def _load_file(path: str) -> Dict[str, Any]:
    """Load settings from YAML file."""
    config_path = Path(path)

    if not config_path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")

    logger.info(f"Loaded validator settings from {path}")
    return data


def load_settings(path: Optional[str] = None) -> ValidatorSettings:
    """
    Build ValidatorSettings from file and environment.

    Args:
        path: Optional YAML settings file (falls back to RULEKIT_CONFIG)

    Returns:
        ValidatorSettings with custom rules already imported
    """
    load_dotenv()

    path = path or os.getenv("RULEKIT_CONFIG")
    data = _load_file(path) if path else {}

    unknown = set(data) - set(ValidatorSettings.__dataclass_fields__)
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")

    env_overrides = {
        "strict": os.getenv("RULEKIT_STRICT"),
        "accumulate": os.getenv("RULEKIT_ACCUMULATE"),
        "log_level": os.getenv("RULEKIT_LOG_LEVEL"),
        "log_format": os.getenv("RULEKIT_LOG_FORMAT"),
        "enable_metrics": os.getenv("RULEKIT_ENABLE_METRICS"),
    }
    data.update({k: v for k, v in env_overrides.items() if v is not None})

    settings = ValidatorSettings(
        strict=parse_bool(data.get("strict", False), "strict"),
        accumulate=parse_bool(data.get("accumulate", True), "accumulate"),
        log_level=str(data.get("log_level", "INFO")).upper(),
        log_format=str(data.get("log_format", "json")).lower(),
        enable_metrics=parse_bool(data.get("enable_metrics", True), "enable_metrics"),
    )

    if settings.log_format not in LOG_FORMATS:
        raise ConfigurationError(f"log_format must be one of {LOG_FORMATS}, got {settings.log_format!r}")

    custom_rules = data.get("custom_rules") or {}
    if not isinstance(custom_rules, dict):
        raise ConfigurationError("custom_rules must be a mapping of rule name to import path")
    settings.custom_rules = {name: import_rule(str(target)) for name, target in custom_rules.items()}

    return settings
