"""
Configuration Loader
Builds the tool configuration from environment variables and command-line overrides
"""

import os
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from hpascale.config_validator import ConfigValidator

logger = logging.getLogger(__name__)

DEFAULT_KUBECONFIG = "~/.kube/config"


@dataclass
class ToolConfig:
    """hpascale configuration"""
    kubeconfig: str
    namespace: Optional[str]
    context: Optional[str]
    dry_run: bool
    log_level: str
    log_format: str
    output_format: str
    gauge_width: int


def load_config(environ: Optional[Dict[str, str]] = None) -> ToolConfig:
    """
    Load configuration from environment variables

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated ToolConfig
    """
    env = os.environ if environ is None else environ

    config = ToolConfig(
        kubeconfig=ConfigValidator.validate_kubeconfig(env.get("KUBECONFIG", DEFAULT_KUBECONFIG)),
        namespace=env.get("HPASCALE_NAMESPACE") or None,
        context=env.get("HPASCALE_CONTEXT") or None,
        dry_run=ConfigValidator.validate_bool(env.get("DRY_RUN", "false"), "DRY_RUN"),
        log_level=ConfigValidator.validate_log_level(env.get("LOG_LEVEL", "INFO")),
        log_format=ConfigValidator.validate_log_format(env.get("LOG_FORMAT", "text")),
        output_format=ConfigValidator.validate_output_format(env.get("OUTPUT_FORMAT", "auto")),
        gauge_width=ConfigValidator.validate_gauge_width(env.get("GAUGE_WIDTH", "40")),
    )

    logger.debug(f"Configuration loaded from environment: {config}")
    return config


def merge_overrides(base: ToolConfig, overrides: Dict[str, Any]) -> ToolConfig:
    """Apply command-line overrides; None means "not given" and keeps the base value"""
    validators = {
        'kubeconfig': ConfigValidator.validate_kubeconfig,
        'log_level': ConfigValidator.validate_log_level,
        'log_format': ConfigValidator.validate_log_format,
        'output_format': ConfigValidator.validate_output_format,
        'gauge_width': lambda value: ConfigValidator.validate_gauge_width(str(value)),
    }

    changes = {}
    for key, value in overrides.items():
        if value is None:
            continue
        validate = validators.get(key)
        changes[key] = validate(value) if validate else value

    return replace(base, **changes)
