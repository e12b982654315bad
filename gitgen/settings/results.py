# -*- coding: utf-8 -*-
"""Outcome types for settings operations.

Lookup and namespace failures are ordinary outcomes and come back as a
:class:`Result`.  Only storage failures are raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .models import ModelProfile


class Status(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    CONFLICT = "conflict"
    INVALID = "invalid"


@dataclass(frozen=True)
class Result:
    """Tagged outcome of a lookup or mutation."""

    status: Status
    profile: Optional[ModelProfile] = None
    message: str = ""
    changed: bool = False

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @classmethod
    def success(
        cls,
        profile: Optional[ModelProfile] = None,
        message: str = "",
        *,
        changed: bool = False,
    ) -> "Result":
        return cls(Status.OK, profile, message, changed)

    @classmethod
    def not_found(cls, ref: str) -> "Result":
        return cls(Status.NOT_FOUND, None, f"Model '{ref}' not found")

    @classmethod
    def ambiguous(cls, ref: str, count: int) -> "Result":
        return cls(
            Status.AMBIGUOUS,
            None,
            f"'{ref}' matches {count} models",
        )

    @classmethod
    def conflict(cls, message: str) -> "Result":
        return cls(Status.CONFLICT, None, message)

    @classmethod
    def invalid(cls, message: str) -> "Result":
        return cls(Status.INVALID, None, message)


# ---------------------------------------------------------------------------
# Hard failures
# ---------------------------------------------------------------------------


class SettingsStoreError(RuntimeError):
    """Base class for failures of the encrypted settings file."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class CorruptStoreError(SettingsStoreError):
    """The settings file exists but cannot be decrypted or parsed."""


class StoreIOError(SettingsStoreError):
    """Writing or replacing the settings file failed."""
