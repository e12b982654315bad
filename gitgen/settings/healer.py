# -*- coding: utf-8 -*-
"""Interactive repair of a dangling default model reference."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Protocol

from .lifecycle import ModelLifecycleManager
from .models import GitGenSettings, ModelProfile

logger = logging.getLogger(__name__)


class ModelChooser(Protocol):
    """Presents choices to the user and returns the picked index."""

    def notify(self, message: str) -> None:
        ...

    def choose(self, prompt: str, options: List[str]) -> Optional[int]:
        """Return the 0-based index of the chosen option, or None to abort."""
        ...


class HealStatus(str, Enum):
    HEALED = "healed"
    HEALTHY = "healthy"
    ABORTED = "aborted"
    NO_MODELS = "no_models"

    @property
    def succeeded(self) -> bool:
        return self is HealStatus.HEALED


def default_is_dangling(settings: GitGenSettings) -> bool:
    """True when a default is set but matches no profile id."""
    default_id = settings.default_model_id
    return bool(default_id) and settings.get_by_id(default_id) is None


def describe_profile(profile: ModelProfile) -> str:
    label = profile.name
    if profile.aliases:
        label += " (aliases: " + ", ".join(f"@{a}" for a in profile.aliases)
        label += ")"
    if profile.note:
        label += f" - {profile.note}"
    return label


class DefaultModelHealer:
    """Drives the Broken -> Healthy transition of the default reference.

    Only mutates the document in memory; the caller persists on
    :attr:`HealStatus.HEALED`.
    """

    def __init__(self, settings: GitGenSettings, chooser: ModelChooser):
        self.settings = settings
        self.chooser = chooser

    def heal(self) -> HealStatus:
        if not default_is_dangling(self.settings):
            logger.debug("Default model configuration is valid")
            return HealStatus.HEALTHY

        reason = (
            f"The default model id '{self.settings.default_model_id}' "
            "refers to a model that no longer exists."
        )
        if not self.settings.models:
            logger.debug("No models exist, cannot heal default model")
            self.chooser.notify(reason)
            self.chooser.notify("No models are configured to choose from.")
            return HealStatus.NO_MODELS

        self.chooser.notify(reason)
        options = [describe_profile(m) for m in self.settings.models]
        choice = self.chooser.choose(
            "Which model do you want to use as the default?",
            options,
        )
        if choice is None or not 0 <= choice < len(self.settings.models):
            logger.info("Default model healing aborted")
            return HealStatus.ABORTED

        selected = self.settings.models[choice]
        result = ModelLifecycleManager(self.settings).set_default(selected.id)
        if not result.ok:
            logger.warning("Could not set default: %s", result.message)
            return HealStatus.ABORTED
        self.chooser.notify(f"Default model set to '{selected.name}'")
        return HealStatus.HEALED
