from __future__ import annotations

from gitgen.settings import AliasManager, Status

from helpers import make_profile, make_settings


def _settings():
    return make_settings(
        make_profile("m1", "fast", ["f"]),
        make_profile("m2", "slow"),
    )


def test_add_alias():
    settings = _settings()
    result = AliasManager(settings).add_alias("slow", "s")
    assert result.ok
    assert result.changed
    assert settings.models[1].aliases == ["s"]


def test_add_alias_strips_prefix():
    settings = _settings()
    assert AliasManager(settings).add_alias("m2", "@turtle").ok
    assert settings.models[1].aliases == ["turtle"]


def test_add_alias_to_unknown_model():
    settings = _settings()
    result = AliasManager(settings).add_alias("nope", "x")
    assert result.status is Status.NOT_FOUND


def test_add_alias_conflicts_across_namespace():
    settings = _settings()
    manager = AliasManager(settings)
    for alias in ("F", "fast", "m1", "SLOW", "m2"):
        result = manager.add_alias("slow", alias)
        assert result.status is Status.CONFLICT, alias
    assert settings.models[1].aliases == []


def test_add_duplicate_self_alias_conflicts():
    settings = _settings()
    result = AliasManager(settings).add_alias("fast", "f")
    assert result.status is Status.CONFLICT
    assert settings.models[0].aliases == ["f"]


def test_add_blank_alias_is_invalid():
    settings = _settings()
    manager = AliasManager(settings)
    assert manager.add_alias("fast", "  ").status is Status.INVALID
    assert manager.add_alias("fast", "@").status is Status.INVALID
    assert manager.add_alias("fast", "two words").status is Status.INVALID


def test_remove_alias():
    settings = _settings()
    result = AliasManager(settings).remove_alias("fast", "@F")
    assert result.ok
    assert result.changed
    assert settings.models[0].aliases == []


def test_remove_missing_alias_is_noop():
    settings = _settings()
    result = AliasManager(settings).remove_alias("slow", "s")
    assert result.ok
    assert not result.changed


def test_remove_alias_unknown_model():
    settings = _settings()
    result = AliasManager(settings).remove_alias("nope", "f")
    assert result.status is Status.NOT_FOUND
