# -*- coding: utf-8 -*-
"""Pydantic data models for the settings document and model profiles."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, SecretStr, field_serializer

from ..constant import (
    ALIAS_PREFIX,
    CURRENT_SETTINGS_VERSION,
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MINIMUM_MATCH_LENGTH,
    DEFAULT_TEMPERATURE,
)

# Serialization context key that lets the store write real secret values.
REVEAL_SECRETS = "reveal_secrets"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_profile_id() -> str:
    return uuid.uuid4().hex


def normalize_alias(alias: str) -> str:
    """Strip whitespace and any leading ``@`` from an alias or reference."""
    return alias.strip().lstrip(ALIAS_PREFIX)


class PricingInfo(BaseModel):
    """Per-million-token pricing attached to a profile."""

    input_per_1m: Decimal = Field(default=Decimal("0"), ge=0)
    output_per_1m: Decimal = Field(default=Decimal("0"), ge=0)
    currency_code: str = Field(default="USD")
    updated_at: datetime = Field(default_factory=_utcnow)


class ModelProfile(BaseModel):
    """One named AI-model configuration."""

    model_config = {"protected_namespaces": ()}

    id: str = Field(
        default_factory=_new_profile_id,
        description="Stable identifier, generated on creation",
    )
    name: str = Field(..., description="Unique user-chosen label")
    provider: str = Field(default="", description="Provider identifier")
    type: str = Field(default="", description="Backend API type")
    url: str = Field(default="", description="Provider endpoint URL")
    model_id: str = Field(
        default="",
        description="Model identifier used in API calls",
    )
    secret: SecretStr = Field(
        default=SecretStr(""),
        description="API key; only stored inside the encrypted document",
    )
    requires_auth: bool = Field(default=True)
    temperature: float = Field(default=DEFAULT_TEMPERATURE)
    max_output_tokens: int = Field(default=DEFAULT_MAX_OUTPUT_TOKENS)
    aliases: List[str] = Field(default_factory=list)
    note: Optional[str] = Field(default=None)
    system_prompt: Optional[str] = Field(default=None)
    pricing: Optional[PricingInfo] = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow)
    last_used: datetime = Field(default_factory=_utcnow)

    @field_serializer("secret", when_used="json")
    def _dump_secret(self, value: SecretStr, info) -> str:
        if info.context and info.context.get(REVEAL_SECRETS):
            return value.get_secret_value()
        return str(value)

    def identifiers(self) -> List[str]:
        """Return id, name and aliases (the profile's namespace entries)."""
        return [self.id, self.name, *self.aliases]


class AppSettings(BaseModel):
    """Application preferences stored alongside the profiles."""

    show_token_usage: bool = Field(default=True)
    copy_to_clipboard: bool = Field(default=True)
    enable_partial_matching: bool = Field(
        default=True,
        description="Whether partial (substring) lookups are allowed",
    )
    minimum_match_length: int = Field(
        default=DEFAULT_MINIMUM_MATCH_LENGTH,
        ge=1,
        description="Shortest input accepted for partial lookups",
    )


class GitGenSettings(BaseModel):
    """Root settings document (one per installation)."""

    version: str = Field(default=CURRENT_SETTINGS_VERSION)
    models: List[ModelProfile] = Field(default_factory=list)
    default_model_id: Optional[str] = Field(default=None)
    settings: AppSettings = Field(default_factory=AppSettings)

    def index_of(self, profile_id: str) -> int:
        """Return the position of the profile with *profile_id*, or -1."""
        for i, profile in enumerate(self.models):
            if profile.id == profile_id:
                return i
        return -1

    def get_by_id(self, profile_id: str) -> Optional[ModelProfile]:
        i = self.index_of(profile_id)
        return self.models[i] if i >= 0 else None
