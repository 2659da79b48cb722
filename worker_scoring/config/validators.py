"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

KNOWN_SECTIONS = {"server", "logging", "auth"}


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    for section in sorted(set(config_dict) - KNOWN_SECTIONS):
        warning_messages.append(f"Unknown configuration section '{section}' will be ignored")

    server = config_dict.get("server", {})
    if isinstance(server, dict):
        port = server.get("port")
        if isinstance(port, int) and 0 < port < 1024:
            warning_messages.append(f"Port {port} is privileged and may require elevated permissions")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
