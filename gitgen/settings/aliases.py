# -*- coding: utf-8 -*-
"""Alias lifecycle for model profiles."""

from __future__ import annotations

import logging

from .models import GitGenSettings, normalize_alias
from .namespace import find_collision, namespace_key
from .resolver import ModelResolver
from .results import Result
from .validation import alias_error

logger = logging.getLogger(__name__)


class AliasManager:
    """Adds and removes aliases in place on a loaded document."""

    def __init__(self, settings: GitGenSettings) -> None:
        self.settings = settings
        self.resolver = ModelResolver(settings)

    def add_alias(self, profile_ref: str, alias: str) -> Result:
        normalized = normalize_alias(alias or "")
        err = alias_error(normalized)
        if err:
            return Result.invalid(err)

        found = self.resolver.find(profile_ref)
        if not found.ok:
            return found
        profile = found.profile

        # The target profile is part of the namespace too.
        message = find_collision(self.settings, normalized)
        if message is not None:
            return Result.conflict(f"Alias '@{normalized}': {message}")

        profile.aliases.append(normalized)
        logger.debug("Added alias '%s' to model '%s'", normalized, profile.name)
        return Result.success(
            profile,
            f"Added alias '@{normalized}' to model '{profile.name}'",
            changed=True,
        )

    def remove_alias(self, profile_ref: str, alias: str) -> Result:
        normalized = normalize_alias(alias or "")
        if not normalized:
            return Result.invalid("Alias cannot be empty or whitespace")

        found = self.resolver.find(profile_ref)
        if not found.ok:
            return found
        profile = found.profile

        key = namespace_key(normalized)
        kept = [a for a in profile.aliases if namespace_key(a) != key]
        if len(kept) == len(profile.aliases):
            logger.debug(
                "Alias '%s' not present on model '%s'",
                normalized,
                profile.name,
            )
            return Result.success(
                profile,
                f"Model '{profile.name}' has no alias '@{normalized}'",
            )

        profile.aliases = kept
        logger.debug(
            "Removed alias '%s' from model '%s'",
            normalized,
            profile.name,
        )
        return Result.success(
            profile,
            f"Removed alias '@{normalized}' from model '{profile.name}'",
            changed=True,
        )
