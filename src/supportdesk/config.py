# src/supportdesk/config.py
import copy
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .logger import get_logger
from .models import AppConfig

logger = get_logger(__name__)

DEFAULT_SUBJECT_TEMPLATE = "Support Request from {{name}}: {{issue}}"

# Sections merged key-by-key; everything else is replaced wholesale.
NESTED_SECTIONS = ("brand", "smtp")


def default_config(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Built-in configuration. SMTP settings and the recipient come from the
    environment: SMTP_HOST, SMTP_PORT, SMTP_SECURE, SMTP_USER, SMTP_PASS,
    SUPPORT_EMAIL.
    """
    env = os.environ if env is None else env
    return {
        "brand": {
            "name": "Customer Support",
            "primary_color": "#2563eb",
            "secondary_color": "#1e40af",
            "tagline": "We're here to help",
        },
        "smtp": {
            "host": env.get("SMTP_HOST", "smtp.gmail.com"),
            "port": env.get("SMTP_PORT", "587"),
            "secure": env.get("SMTP_SECURE") == "true",
            "auth": {
                "user": env.get("SMTP_USER", ""),
                "pass": env.get("SMTP_PASS", ""),
            },
        },
        "support_email": env.get("SUPPORT_EMAIL", "support@example.com"),
        "email_subject_template": DEFAULT_SUBJECT_TEMPLATE,
        "custom_fields": [
            {
                "key": "email",
                "label": "Email Address",
                "type": "email",
                "placeholder": "you@example.com",
                "required": False,
            },
        ],
        "priorities": ["Low", "Medium", "High", "Urgent"],
        "categories": [
            "General Inquiry",
            "Technical Support",
            "Billing",
            "Feature Request",
            "Bug Report",
        ],
    }


def _section(overrides: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = overrides.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        logger.warning("Ignoring override for '%s': expected a mapping, got %s",
                       key, type(value).__name__)
        return {}
    return {k: v for k, v in value.items() if v is not None}


def merge_config(base: Mapping[str, Any], overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Deep-merge a partial override into a base config dict.

    Top-level values replace the base wholesale (a custom_fields override
    replaces the whole list). brand and smtp merge per key, smtp.auth one
    level deeper. None in the override means "not set".
    """
    overrides = overrides or {}
    merged = copy.deepcopy(dict(base))
    for key, value in overrides.items():
        if key in NESTED_SECTIONS or value is None:
            continue
        merged[key] = copy.deepcopy(value)

    merged["brand"] = {**base.get("brand", {}), **_section(overrides, "brand")}

    smtp_override = _section(overrides, "smtp")
    base_smtp = base.get("smtp", {})
    merged["smtp"] = {
        **base_smtp,
        **smtp_override,
        "auth": {**base_smtp.get("auth", {}), **_section(smtp_override, "auth")},
    }
    return merged


def create_config(overrides: Optional[Mapping[str, Any]] = None,
                  env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Resolve the effective (immutable) config for one server instance."""
    merged = merge_config(default_config(env), overrides)
    try:
        return AppConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_overrides(path: str) -> Dict[str, Any]:
    """Read a YAML override file. An empty file means no overrides."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config overrides from {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config overrides in {path} must be a mapping, got {type(data).__name__}")
    logger.info("⚙️ Loaded config overrides from %s", path)
    return data
