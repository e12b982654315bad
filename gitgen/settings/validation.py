# -*- coding: utf-8 -*-
"""Field validation for model profiles."""

from __future__ import annotations

from typing import Dict
from urllib.parse import urlparse

from ..constant import (
    ALIAS_PREFIX,
    MAX_MODEL_NAME_LENGTH,
    MAX_OUTPUT_TOKENS,
    MAX_SECRET_LENGTH,
    MAX_TEMPERATURE,
    MIN_OUTPUT_TOKENS,
    MIN_SECRET_LENGTH,
    MIN_TEMPERATURE,
)
from .models import ModelProfile

# Characters that break shell quoting when names are echoed back to users.
_INVALID_NAME_CHARS = frozenset("\"'`$\\")


def _has_control_chars(value: str) -> bool:
    return any(ord(c) < 32 or ord(c) == 127 for c in value)


def name_error(name: str, label: str = "Model name") -> str:
    """Return an error message for *name*, or ``""`` when valid."""
    if not name or not name.strip():
        return f"{label} cannot be empty"
    if len(name) > MAX_MODEL_NAME_LENGTH:
        return f"{label} cannot exceed {MAX_MODEL_NAME_LENGTH} characters"
    if _has_control_chars(name):
        return f"{label} cannot contain control characters"
    if any(c in _INVALID_NAME_CHARS for c in name):
        return f"{label} contains invalid characters"
    return ""


def url_error(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return "URL must use HTTP or HTTPS protocol"
    if not parsed.hostname:
        return "URL must have a valid hostname"
    return ""


def secret_error(secret: str) -> str:
    if len(secret) < MIN_SECRET_LENGTH:
        return f"API key must be at least {MIN_SECRET_LENGTH} characters"
    if len(secret) > MAX_SECRET_LENGTH:
        return f"API key cannot exceed {MAX_SECRET_LENGTH} characters"
    if _has_control_chars(secret):
        return "API key cannot contain control characters"
    return ""


def alias_error(alias: str) -> str:
    """Validate an alias after its ``@`` prefix has been stripped."""
    if not alias:
        return "Alias cannot be empty or whitespace"
    if any(c.isspace() for c in alias):
        return "Alias cannot contain whitespace"
    return name_error(alias, "Alias")


def validation_errors(profile: ModelProfile) -> Dict[str, str]:
    """Return a mapping of field name to error for an invalid *profile*.

    Backend fields (url, model_id, secret) are only checked when set.
    """
    errors: Dict[str, str] = {}

    if not profile.id or any(c.isspace() for c in profile.id):
        errors["id"] = "Model id cannot be empty or contain whitespace"

    err = name_error(profile.name)
    if not err and profile.name.startswith(ALIAS_PREFIX):
        err = f"Model name cannot start with '{ALIAS_PREFIX}'"
    if err:
        errors["name"] = err

    if profile.url:
        err = url_error(profile.url)
        if err:
            errors["url"] = err

    if profile.model_id:
        err = name_error(profile.model_id, "Model id")
        if err:
            errors["model_id"] = err

    secret = profile.secret.get_secret_value()
    if profile.requires_auth and secret:
        err = secret_error(secret)
        if err:
            errors["secret"] = err

    if not MIN_TEMPERATURE <= profile.temperature <= MAX_TEMPERATURE:
        errors["temperature"] = (
            f"Temperature must be between {MIN_TEMPERATURE} "
            f"and {MAX_TEMPERATURE}"
        )

    if not MIN_OUTPUT_TOKENS <= profile.max_output_tokens <= MAX_OUTPUT_TOKENS:
        errors["max_output_tokens"] = (
            f"Max output tokens must be between {MIN_OUTPUT_TOKENS} "
            f"and {MAX_OUTPUT_TOKENS}"
        )

    for alias in profile.aliases:
        err = alias_error(alias)
        if err:
            errors["aliases"] = err
            break

    return errors


def mask_secret(secret: str, visible: int = 4) -> str:
    """Hide all but the last *visible* characters of *secret*.

    Secrets too short to reveal anything safely are masked entirely.
    """
    if len(secret) <= visible * 2:
        return "*" * len(secret)
    return "*" * 8 + secret[-visible:]
