# -*- coding: utf-8 -*-
"""Resolve user-supplied references to model profiles."""

from __future__ import annotations

import logging
from typing import Callable, List

from .models import GitGenSettings, ModelProfile
from .namespace import namespace_key
from .results import Result

logger = logging.getLogger(__name__)


class ModelResolver:
    """Tiered, case-insensitive lookup over one settings document.

    Exact tiers are tried in order and the first tier with a hit wins:
    id, then name, then alias.  Substring matching is a separate query
    and is never used as a fallback for exact lookups.
    """

    def __init__(self, settings: GitGenSettings) -> None:
        self.settings = settings

    def _tier(
        self,
        key: str,
        values: Callable[[ModelProfile], List[str]],
    ) -> List[ModelProfile]:
        return [
            m
            for m in self.settings.models
            if any(namespace_key(v) == key for v in values(m))
        ]

    def resolve(self, name_or_id: str) -> List[ModelProfile]:
        """Return the hits of the first exact tier that has any."""
        key = namespace_key(name_or_id or "")
        if not key:
            return []
        tiers = (
            ("id", lambda m: [m.id]),
            ("name", lambda m: [m.name]),
            ("alias", lambda m: m.aliases),
        )
        for tier_name, values in tiers:
            hits = self._tier(key, values)
            if hits:
                logger.debug(
                    "Resolved '%s' by %s to %s",
                    name_or_id,
                    tier_name,
                    [m.name for m in hits],
                )
                return hits
        logger.debug("No exact match for '%s'", name_or_id)
        return []

    def find(self, name_or_id: str) -> Result:
        """Resolve to exactly one profile or report why not."""
        hits = self.resolve(name_or_id)
        if not hits:
            return Result.not_found(name_or_id)
        if len(hits) > 1:
            return Result.ambiguous(name_or_id, len(hits))
        return Result.success(hits[0])

    def partial_matches(self, partial: str) -> List[ModelProfile]:
        """Return profiles whose id, name or any alias contains *partial*.

        Results keep document order and list each profile once. The
        minimum length applies to the input after the ``@`` prefix and
        surrounding whitespace are removed.
        """
        if not partial or not partial.strip():
            return []
        app = self.settings.settings
        needle = namespace_key(partial)
        if (
            not app.enable_partial_matching
            or len(needle) < app.minimum_match_length
        ):
            logger.debug(
                "Partial matching skipped for '%s' (enabled=%s, min=%d)",
                partial,
                app.enable_partial_matching,
                app.minimum_match_length,
            )
            return []

        matches: List[ModelProfile] = []
        seen: set[str] = set()
        for m in self.settings.models:
            if m.id in seen:
                continue
            if any(needle in namespace_key(v) for v in m.identifiers()):
                seen.add(m.id)
                matches.append(m)
        logger.debug(
            "Partial match for '%s': %d models",
            partial,
            len(matches),
        )
        return matches
