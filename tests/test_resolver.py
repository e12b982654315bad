from __future__ import annotations

from gitgen.settings import AppSettings, ModelResolver, Status

from helpers import make_profile, make_settings


def _resolver():
    return ModelResolver(
        make_settings(
            make_profile("m1", "fast", ["f"]),
            make_profile("m2", "fancy-gpt", ["gpt4"]),
            make_profile("gpt-legacy", "old"),
            make_profile("m4", "local", ["llama"]),
        ),
    )


def test_exact_tiers_resolve_same_profile():
    resolver = _resolver()
    for ref in ("m1", "fast", "f"):
        hits = resolver.resolve(ref)
        assert [m.id for m in hits] == ["m1"]


def test_resolution_is_case_insensitive():
    resolver = _resolver()
    assert resolver.find("FAST").profile.id == "m1"
    assert resolver.find("M1").profile.id == "m1"
    assert resolver.find("LLaMa").profile.id == "m4"


def test_alias_does_not_fall_through_to_partial():
    # "f" is also a substring of "fancy-gpt"
    resolver = _resolver()
    assert [m.id for m in resolver.resolve("f")] == ["m1"]


def test_alias_prefix_is_ignored():
    resolver = _resolver()
    assert resolver.find("@f").profile.id == "m1"
    assert resolver.find("@gpt4").profile.id == "m2"


def test_id_tier_beats_name_tier():
    resolver = ModelResolver(
        make_settings(
            make_profile("alpha", "first"),
            make_profile("b2", "Alpha"),
        ),
    )
    assert resolver.find("alpha").profile.id == "alpha"


def test_exact_lookup_never_guesses():
    resolver = _resolver()
    result = resolver.find("gpt")
    assert result.status is Status.NOT_FOUND
    assert result.profile is None


def test_blank_reference_is_not_found():
    resolver = _resolver()
    assert resolver.resolve("") == []
    assert resolver.find("   ").status is Status.NOT_FOUND


def test_ambiguous_tier_is_reported():
    # Not reachable through the managers; built directly.
    resolver = ModelResolver(
        make_settings(
            make_profile("m1", "one", ["dup"]),
            make_profile("m2", "two", ["DUP"]),
        ),
    )
    result = resolver.find("dup")
    assert result.status is Status.AMBIGUOUS
    assert result.profile is None


def test_partial_match_document_order_and_dedup():
    resolver = _resolver()
    matches = resolver.partial_matches("gpt")
    # m2 matches by name and alias but is listed once.
    assert [m.id for m in matches] == ["m2", "gpt-legacy"]


def test_partial_match_is_case_insensitive():
    resolver = _resolver()
    assert [m.id for m in resolver.partial_matches("GPT")] == ["m2", "gpt-legacy"]


def test_partial_match_checks_aliases():
    resolver = _resolver()
    assert [m.id for m in resolver.partial_matches("lam")] == ["m4"]


def test_partial_match_respects_minimum_length():
    resolver = _resolver()
    assert resolver.partial_matches("g") == []
    assert resolver.partial_matches("   ") == []


def test_partial_match_minimum_ignores_alias_prefix():
    resolver = _resolver()
    assert resolver.partial_matches("@g") == []
    assert resolver.partial_matches(" g ") == []
    assert [m.id for m in resolver.partial_matches("@gp")] == ["m2", "gpt-legacy"]


def test_partial_match_can_be_disabled():
    settings = make_settings(make_profile("m2", "fancy-gpt"))
    settings.settings = AppSettings(enable_partial_matching=False)
    assert ModelResolver(settings).partial_matches("gpt") == []
