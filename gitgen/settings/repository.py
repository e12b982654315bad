# -*- coding: utf-8 -*-
"""Typed access to the settings document (load → modify → save)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from ..constant import KEY_FILE
from .aliases import AliasManager
from .healer import DefaultModelHealer, HealStatus, ModelChooser
from .lifecycle import ModelLifecycleManager
from .models import GitGenSettings, ModelProfile
from .namespace import document_conflict
from .resolver import ModelResolver
from .results import Result
from .store import EncryptedStore

logger = logging.getLogger(__name__)


class SettingsRepository:
    """The only writer of the settings file.

    Nothing is cached between calls: every operation reads the file, and
    mutations write it back only when every check passed.
    """

    def __init__(self, store: Optional[EncryptedStore] = None) -> None:
        self.store = store if store is not None else EncryptedStore()

    @classmethod
    def at(
        cls,
        path: Path,
        key_path: Optional[Path] = None,
    ) -> "SettingsRepository":
        if key_path is None:
            key_path = Path(path).parent / "keys" / KEY_FILE
        return cls(EncryptedStore(path, key_path))

    # -----------------------------------------------------------------------
    # Load / Save
    # -----------------------------------------------------------------------

    def load_settings(self) -> GitGenSettings:
        return self.store.load()

    def save_settings(self, settings: GitGenSettings) -> Result:
        """Persist *settings* unless it breaks id/name/alias uniqueness."""
        conflict = document_conflict(settings)
        if conflict is not None:
            logger.debug("Refusing to save settings: %s", conflict)
            return Result.conflict(conflict)
        self.store.save(settings)
        return Result.success(message="Settings saved", changed=True)

    def _mutate(self, change: Callable[[GitGenSettings], Result]) -> Result:
        settings = self.load_settings()
        result = change(settings)
        if not result.ok:
            logger.debug("Nothing saved: %s", result.message)
            return result
        if result.changed:
            saved = self.save_settings(settings)
            if not saved.ok:
                return saved
        return result

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def list_models(self) -> List[ModelProfile]:
        return list(self.load_settings().models)

    def get_model(self, name_or_id: str) -> Optional[ModelProfile]:
        """Return the single exact (id, name or alias) match, or ``None``."""
        return ModelResolver(self.load_settings()).find(name_or_id).profile

    def find_model(self, name_or_id: str) -> Result:
        """Like :meth:`get_model` but reports why a lookup failed."""
        return ModelResolver(self.load_settings()).find(name_or_id)

    def get_models_by_partial_match(self, partial: str) -> List[ModelProfile]:
        return ModelResolver(self.load_settings()).partial_matches(partial)

    def get_default_model(self) -> Optional[ModelProfile]:
        """Return the default profile.

        With no default set, the first profile is used.  A dangling default
        yields ``None``; see :meth:`heal_default_model`.
        """
        settings = self.load_settings()
        if not settings.default_model_id:
            return settings.models[0] if settings.models else None
        profile = settings.get_by_id(settings.default_model_id)
        if profile is None:
            logger.warning(
                "Default model id '%s' does not match any model",
                settings.default_model_id,
            )
        return profile

    # -----------------------------------------------------------------------
    # Mutators
    # -----------------------------------------------------------------------

    def add_model(
        self,
        profile: ModelProfile,
        *,
        set_default: bool = False,
    ) -> Result:
        return self._mutate(
            lambda s: ModelLifecycleManager(s).add(
                profile,
                set_default=set_default,
            ),
        )

    def update_model(self, profile: ModelProfile) -> Result:
        return self._mutate(
            lambda s: ModelLifecycleManager(s).update(profile),
        )

    def delete_model(self, name_or_id: str) -> Result:
        return self._mutate(
            lambda s: ModelLifecycleManager(s).delete(name_or_id),
        )

    def set_default_model(self, name_or_id: str) -> Result:
        return self._mutate(
            lambda s: ModelLifecycleManager(s).set_default(name_or_id),
        )

    def record_usage(self, name_or_id: str) -> Result:
        return self._mutate(
            lambda s: ModelLifecycleManager(s).touch(name_or_id),
        )

    def add_alias(self, profile_ref: str, alias: str) -> Result:
        return self._mutate(
            lambda s: AliasManager(s).add_alias(profile_ref, alias),
        )

    def remove_alias(self, profile_ref: str, alias: str) -> Result:
        return self._mutate(
            lambda s: AliasManager(s).remove_alias(profile_ref, alias),
        )

    # -----------------------------------------------------------------------
    # Healing
    # -----------------------------------------------------------------------

    def heal_default_model(self, chooser: ModelChooser) -> HealStatus:
        settings = self.load_settings()
        status = DefaultModelHealer(settings, chooser).heal()
        if status.succeeded:
            self.save_settings(settings)
        return status
