# -*- coding: utf-8 -*-
"""Add, update, delete and select model profiles."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .models import GitGenSettings, ModelProfile, normalize_alias
from .namespace import check_profile
from .resolver import ModelResolver
from .results import Result
from .validation import validation_errors

logger = logging.getLogger(__name__)


def _prepare(profile: ModelProfile) -> ModelProfile:
    """Return a detached copy with normalized name and aliases."""
    prepared = profile.model_copy(deep=True)
    prepared.name = prepared.name.strip()
    prepared.aliases = [normalize_alias(a) for a in prepared.aliases]
    return prepared


def _validate(profile: ModelProfile) -> Result:
    errors = validation_errors(profile)
    if not errors:
        return Result.success()
    details = "; ".join(f"{k}: {v}" for k, v in sorted(errors.items()))
    return Result.invalid(f"Invalid model '{profile.name}': {details}")


class ModelLifecycleManager:
    """Mutates the profile list of a loaded document in place.

    Every method checks first and mutates last, so a failed result leaves
    the document untouched.
    """

    def __init__(self, settings: GitGenSettings) -> None:
        self.settings = settings
        self.resolver = ModelResolver(settings)

    def add(
        self,
        profile: ModelProfile,
        *,
        set_default: bool = False,
    ) -> Result:
        candidate = _prepare(profile)
        checked = _validate(candidate)
        if not checked.ok:
            return checked

        message = check_profile(self.settings, candidate)
        if message is not None:
            return Result.conflict(message)

        self.settings.models.append(candidate)
        # The first model of a fresh document becomes the default.
        if set_default or (
            len(self.settings.models) == 1
            and self.settings.default_model_id is None
        ):
            self.settings.default_model_id = candidate.id
        logger.debug("Added model '%s' (%s)", candidate.name, candidate.id)
        message = f"Added model '{candidate.name}'"
        if set_default:
            message += " as the default"
        return Result.success(
            candidate,
            message,
            changed=True,
        )

    def update(self, profile: ModelProfile) -> Result:
        index = self.settings.index_of(profile.id)
        if index < 0:
            return Result.not_found(profile.id)

        candidate = _prepare(profile)
        checked = _validate(candidate)
        if not checked.ok:
            return checked

        message = check_profile(
            self.settings,
            candidate,
            exclude_id=candidate.id,
        )
        if message is not None:
            return Result.conflict(message)

        candidate.created_at = self.settings.models[index].created_at
        self.settings.models[index] = candidate
        logger.debug("Updated model '%s' (%s)", candidate.name, candidate.id)
        return Result.success(
            candidate,
            f"Updated model '{candidate.name}'",
            changed=True,
        )

    def delete(self, name_or_id: str) -> Result:
        found = self.resolver.find(name_or_id)
        if not found.ok:
            return found
        target = found.profile
        self.settings.models = [
            m for m in self.settings.models if m.id != target.id
        ]
        # default_model_id is left as is; a dangling default is healed
        # explicitly by the caller.
        if self.settings.default_model_id == target.id:
            logger.debug("Deleted the default model '%s'", target.name)
        logger.debug("Deleted model '%s' (%s)", target.name, target.id)
        return Result.success(
            target,
            f"Deleted model '{target.name}'",
            changed=True,
        )

    def set_default(self, name_or_id: str) -> Result:
        found = self.resolver.find(name_or_id)
        if not found.ok:
            return found
        target = found.profile
        self.settings.default_model_id = target.id
        logger.debug("Default model set to '%s'", target.name)
        return Result.success(
            target,
            f"Default model set to '{target.name}'",
            changed=True,
        )

    def touch(self, name_or_id: str) -> Result:
        """Record that a profile was just used."""
        found = self.resolver.find(name_or_id)
        if not found.ok:
            return found
        found.profile.last_used = datetime.now(timezone.utc)
        return Result.success(found.profile, changed=True)
