# -*- coding: utf-8 -*-
"""Model settings: encrypted store, resolution and lifecycle."""

from .aliases import AliasManager
from .healer import (
    DefaultModelHealer,
    HealStatus,
    ModelChooser,
    default_is_dangling,
)
from .lifecycle import ModelLifecycleManager
from .models import (
    AppSettings,
    GitGenSettings,
    ModelProfile,
    PricingInfo,
    normalize_alias,
)
from .repository import SettingsRepository
from .resolver import ModelResolver
from .results import (
    CorruptStoreError,
    Result,
    SettingsStoreError,
    Status,
    StoreIOError,
)
from .store import EncryptedStore, get_key_path, get_settings_path
from .validation import mask_secret, validation_errors

__all__ = [
    # models
    "AppSettings",
    "GitGenSettings",
    "ModelProfile",
    "PricingInfo",
    "normalize_alias",
    # results
    "CorruptStoreError",
    "Result",
    "SettingsStoreError",
    "Status",
    "StoreIOError",
    # store
    "EncryptedStore",
    "get_key_path",
    "get_settings_path",
    # components
    "AliasManager",
    "DefaultModelHealer",
    "HealStatus",
    "ModelChooser",
    "ModelLifecycleManager",
    "ModelResolver",
    "SettingsRepository",
    "default_is_dangling",
    # validation
    "mask_secret",
    "validation_errors",
]
