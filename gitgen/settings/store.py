# -*- coding: utf-8 -*-
"""Encrypted persistence of the settings document (settings.enc)."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from pydantic import ValidationError

from ..constant import (
    KEY_FILE,
    KEYS_DIR,
    SETTINGS_FILE,
    SETTINGS_KEY_ENV,
    WORKING_DIR,
)
from .models import REVEAL_SECRETS, GitGenSettings
from .namespace import document_conflict
from .results import CorruptStoreError, StoreIOError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------


def get_settings_path() -> Path:
    """Return the default settings file path."""
    return WORKING_DIR / SETTINGS_FILE


def get_key_path() -> Path:
    """Return the default key file path."""
    return KEYS_DIR / KEY_FILE


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_atomic(path: Path, payload: bytes) -> None:
    """Write *payload* to a temp file beside *path*, then replace *path*.

    The target is either the old file or the complete new one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _publish_key(path: Path, key: bytes) -> None:
    """Create *path* holding *key*, failing if the file already exists.

    The key is written to a temp file and hard-linked into place, so the
    key file never appears half written and an existing key is never
    replaced. Raises :class:`FileExistsError` when another process won.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(key)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, 0o600)
        os.link(tmp_name, path)
    finally:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass


class EncryptedStore:
    """Reads and writes the settings document as a Fernet token on disk.

    Key material comes from ``GITGEN_SETTINGS_KEY`` when set, otherwise from
    the key file, which is generated on the first save.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        key_path: Optional[Path] = None,
    ) -> None:
        self.path = Path(path) if path is not None else get_settings_path()
        self.key_path = (
            Path(key_path) if key_path is not None else get_key_path()
        )

    # -- key material ------------------------------------------------------

    def _read_key(self) -> Optional[bytes]:
        env_key = os.environ.get(SETTINGS_KEY_ENV, "").strip()
        if env_key:
            return env_key.encode("ascii")
        if self.key_path.is_file():
            return self.key_path.read_bytes().strip()
        return None

    def _create_key(self) -> bytes:
        """Generate the key file, or adopt one another process just made."""
        key = Fernet.generate_key()
        try:
            _publish_key(self.key_path, key)
        except FileExistsError:
            logger.info(
                "Key file %s was created concurrently, using it",
                self.key_path,
            )
            existing = self._read_key()
            if existing is None:
                raise CorruptStoreError(
                    f"Key file {self.key_path} vanished while it was "
                    "being created",
                    self.path,
                )
            return existing
        except OSError as exc:
            raise StoreIOError(
                f"Failed to write key file {self.key_path}: {exc}",
                self.key_path,
            ) from exc
        logger.info("Generated new settings key at %s", self.key_path)
        return key

    def _fernet(self, *, create: bool) -> Fernet:
        key = self._read_key()
        if key is None:
            if not create:
                raise CorruptStoreError(
                    f"Settings file {self.path} exists but no key material "
                    f"was found at {self.key_path}",
                    self.path,
                )
            key = self._create_key()
        try:
            return Fernet(key)
        except ValueError as exc:
            raise CorruptStoreError(
                f"Invalid key material: {exc}",
                self.path,
            ) from exc

    # -- load / save -------------------------------------------------------

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> GitGenSettings:
        """Load and decrypt the document.

        A missing file yields a fresh empty document.
        """
        if not self.path.is_file():
            logger.debug("No settings file at %s, starting empty", self.path)
            return GitGenSettings()

        try:
            token = self.path.read_bytes()
        except OSError as exc:
            raise StoreIOError(
                f"Failed to read settings file {self.path}: {exc}",
                self.path,
            ) from exc

        fernet = self._fernet(create=False)
        try:
            plaintext = fernet.decrypt(token)
        except InvalidToken as exc:
            raise CorruptStoreError(
                f"Cannot decrypt settings file {self.path} "
                "(wrong key or corrupted data)",
                self.path,
            ) from exc

        try:
            settings = GitGenSettings.model_validate_json(plaintext)
        except ValidationError as exc:
            raise CorruptStoreError(
                f"Settings file {self.path} is not a valid document: {exc}",
                self.path,
            ) from exc

        conflict = document_conflict(settings)
        if conflict is not None:
            raise CorruptStoreError(
                f"Settings file {self.path} breaks model uniqueness: "
                f"{conflict}",
                self.path,
            )

        logger.debug(
            "Loaded %d models from %s (default: %s)",
            len(settings.models),
            self.path,
            settings.default_model_id or "(none)",
        )
        return settings

    def save(self, settings: GitGenSettings) -> None:
        """Encrypt and atomically replace the settings file."""
        fernet = self._fernet(create=True)
        payload = settings.model_dump_json(
            context={REVEAL_SECRETS: True},
        ).encode("utf-8")
        token = fernet.encrypt(payload)
        try:
            _write_atomic(self.path, token)
        except OSError as exc:
            logger.error("Failed to save settings to %s: %s", self.path, exc)
            raise StoreIOError(
                f"Failed to save settings to {self.path}: {exc}",
                self.path,
            ) from exc
        logger.debug(
            "Saved %d models to %s (default: %s)",
            len(settings.models),
            self.path,
            settings.default_model_id or "(none)",
        )
