from __future__ import annotations

from datetime import datetime, timezone

from pydantic import SecretStr

from gitgen.settings import (
    GitGenSettings,
    ModelLifecycleManager,
    ModelProfile,
    Status,
)

from helpers import make_profile, make_settings


def _settings():
    return make_settings(
        make_profile("m1", "fast", ["f"]),
        make_profile("m2", "slow", ["s"]),
        default="m1",
    )


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


def test_first_model_becomes_default():
    settings = GitGenSettings()
    result = ModelLifecycleManager(settings).add(make_profile("m1", "fast"))
    assert result.ok
    assert settings.default_model_id == "m1"


def test_add_keeps_existing_default():
    settings = _settings()
    assert ModelLifecycleManager(settings).add(make_profile("m3", "new")).ok
    assert settings.default_model_id == "m1"
    assert [m.id for m in settings.models] == ["m1", "m2", "m3"]


def test_add_as_default_replaces_existing_default():
    settings = _settings()
    manager = ModelLifecycleManager(settings)
    result = manager.add(make_profile("m3", "new"), set_default=True)
    assert result.ok
    assert settings.default_model_id == "m3"


def test_add_as_default_is_not_applied_on_conflict():
    settings = _settings()
    manager = ModelLifecycleManager(settings)
    result = manager.add(make_profile("m3", "FAST"), set_default=True)
    assert result.status is Status.CONFLICT
    assert settings.default_model_id == "m1"


def test_generated_ids_are_unique():
    first, second = ModelProfile(name="a"), ModelProfile(name="b")
    assert first.id and second.id
    assert first.id != second.id


def test_add_rejects_namespace_collisions():
    manager = ModelLifecycleManager(_settings())
    cases = [
        make_profile("m1", "brand-new"),  # duplicate id
        make_profile("m3", "FAST"),  # duplicate name
        make_profile("m3", "f"),  # name equals alias
        make_profile("s", "brand-new"),  # id equals alias
        make_profile("m3", "brand-new", ["slow"]),  # alias equals name
        make_profile("m3", "brand-new", ["m2"]),  # alias equals id
        make_profile("m3", "brand-new", ["@S"]),  # alias equals alias
    ]
    for profile in cases:
        result = manager.add(profile)
        assert result.status is Status.CONFLICT, profile
    assert len(manager.settings.models) == 2


def test_add_rejects_self_collisions():
    manager = ModelLifecycleManager(_settings())
    assert manager.add(
        make_profile("m3", "brand-new", ["x", "X"]),
    ).status is Status.CONFLICT
    assert manager.add(
        make_profile("m3", "brand-new", ["brand-new"]),
    ).status is Status.CONFLICT


def test_add_allows_id_equal_to_own_name():
    settings = GitGenSettings()
    assert ModelLifecycleManager(settings).add(make_profile("gpt", "gpt")).ok


def test_add_rejects_invalid_fields():
    manager = ModelLifecycleManager(_settings())
    bad = [
        make_profile("m3", "   "),
        make_profile("m3", "has$dollar"),
        make_profile("m3", "@name"),
        make_profile("m3", "ok", url="ftp://example.com"),
        make_profile("m3", "ok", temperature=3.5),
        make_profile("m3", "ok", max_output_tokens=10),
        make_profile("m3", "ok", secret=SecretStr("short")),
    ]
    for profile in bad:
        assert manager.add(profile).status is Status.INVALID, profile
    assert len(manager.settings.models) == 2


def test_add_stores_normalized_aliases():
    settings = _settings()
    assert ModelLifecycleManager(settings).add(
        make_profile("m3", "  new  ", ["@n"]),
    ).ok
    assert settings.models[-1].name == "new"
    assert settings.models[-1].aliases == ["n"]


def test_add_does_not_share_state_with_caller():
    settings = GitGenSettings()
    profile = make_profile("m1", "fast")
    ModelLifecycleManager(settings).add(profile)
    profile.aliases.append("later")
    assert settings.models[0].aliases == []


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


def test_update_replaces_by_id():
    settings = _settings()
    original_created = settings.models[1].created_at
    changed = settings.models[1].model_copy(
        update={
            "name": "sloth",
            "created_at": datetime(2000, 1, 1, tzinfo=timezone.utc),
        },
    )
    result = ModelLifecycleManager(settings).update(changed)
    assert result.ok
    assert settings.models[1].name == "sloth"
    assert settings.models[1].created_at == original_created


def test_update_same_name_is_allowed():
    settings = _settings()
    same = settings.models[0].model_copy(update={"note": "hi"})
    assert ModelLifecycleManager(settings).update(same).ok
    assert settings.models[0].note == "hi"


def test_update_unknown_id():
    settings = _settings()
    result = ModelLifecycleManager(settings).update(make_profile("zz", "x"))
    assert result.status is Status.NOT_FOUND


def test_update_rejects_collision_with_other_profiles():
    settings = _settings()
    manager = ModelLifecycleManager(settings)
    assert manager.update(
        settings.models[0].model_copy(update={"name": "slow"}),
    ).status is Status.CONFLICT
    assert manager.update(
        settings.models[0].model_copy(update={"aliases": ["f", "s"]}),
    ).status is Status.CONFLICT
    assert settings.models[0].name == "fast"
    assert settings.models[0].aliases == ["f"]


# ---------------------------------------------------------------------------
# delete / set_default
# ---------------------------------------------------------------------------


def test_delete_by_alias():
    settings = _settings()
    result = ModelLifecycleManager(settings).delete("s")
    assert result.ok
    assert [m.id for m in settings.models] == ["m1"]


def test_delete_default_leaves_dangling_reference():
    settings = _settings()
    assert ModelLifecycleManager(settings).delete("fast").ok
    assert settings.default_model_id == "m1"
    assert settings.get_by_id("m1") is None


def test_delete_unknown():
    settings = _settings()
    result = ModelLifecycleManager(settings).delete("nope")
    assert result.status is Status.NOT_FOUND
    assert len(settings.models) == 2


def test_set_default():
    settings = _settings()
    result = ModelLifecycleManager(settings).set_default("@s")
    assert result.ok
    assert settings.default_model_id == "m2"


def test_set_default_unknown():
    settings = _settings()
    result = ModelLifecycleManager(settings).set_default("gpt")
    assert result.status is Status.NOT_FOUND
    assert settings.default_model_id == "m1"
