# -*- coding: utf-8 -*-
"""Case-insensitive namespace shared by profile ids, names and aliases."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from .models import GitGenSettings, ModelProfile, normalize_alias


def namespace_key(value: str) -> str:
    return normalize_alias(value).casefold()


def _entries(profile: ModelProfile) -> Iterator[Tuple[str, str]]:
    yield "id", profile.id
    yield "name", profile.name
    for alias in profile.aliases:
        yield "alias", alias


def find_collision(
    settings: GitGenSettings,
    value: str,
    *,
    exclude_id: Optional[str] = None,
) -> Optional[str]:
    """Return a conflict message if *value* is taken by another profile.

    Profiles whose id equals *exclude_id* are skipped.
    """
    wanted = namespace_key(value)
    for profile in settings.models:
        if exclude_id is not None and profile.id == exclude_id:
            continue
        for kind, taken in _entries(profile):
            if namespace_key(taken) == wanted:
                if kind == "alias":
                    return (
                        f"'{value}' is already an alias of model "
                        f"'{profile.name}'"
                    )
                return (
                    f"'{value}' conflicts with the {kind} of model "
                    f"'{profile.name}'"
                )
    return None


def check_profile(
    settings: GitGenSettings,
    profile: ModelProfile,
    *,
    exclude_id: Optional[str] = None,
) -> Optional[str]:
    """Check *profile* against itself and every other profile.

    A profile's own id and name may be equal; every alias must be distinct
    from both and from the other aliases.
    """
    own = {namespace_key(profile.id), namespace_key(profile.name)}
    seen: set[str] = set()
    for alias in profile.aliases:
        key = namespace_key(alias)
        if key in own:
            return (
                f"Alias '{alias}' conflicts with the id or name of model "
                f"'{profile.name}'"
            )
        if key in seen:
            return f"Alias '{alias}' is listed more than once"
        seen.add(key)

    checked: set[str] = set()
    for _, value in _entries(profile):
        key = namespace_key(value)
        if key in checked:
            continue
        checked.add(key)
        message = find_collision(settings, value, exclude_id=exclude_id)
        if message is not None:
            return message
    return None


def document_conflict(settings: GitGenSettings) -> Optional[str]:
    """Return the first namespace violation in *settings*, or ``None``.

    Every id must be unique and every profile must pass
    :func:`check_profile` against all the others.
    """
    ids: set[str] = set()
    for profile in settings.models:
        if profile.id in ids:
            return f"Model id '{profile.id}' is used more than once"
        ids.add(profile.id)
    for profile in settings.models:
        message = check_profile(settings, profile, exclude_id=profile.id)
        if message is not None:
            return f"Model '{profile.name}': {message}"
    return None
