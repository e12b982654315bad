# -*- coding: utf-8 -*-
"""CLI commands for managing model profiles."""
from __future__ import annotations

from typing import Optional, Tuple

import click
from pydantic import SecretStr

from ..settings import (
    HealStatus,
    ModelProfile,
    Result,
    SettingsRepository,
    default_is_dangling,
    mask_secret,
)
from .utils import ClickModelChooser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _repo(ctx: click.Context) -> SettingsRepository:
    return ctx.obj["repo"]


def _fail(result: Result) -> None:
    click.echo(click.style(f"Error: {result.message}", fg="red"), err=True)
    raise SystemExit(1)


def _report(result: Result) -> None:
    if not result.ok:
        _fail(result)
    if result.changed:
        click.echo(f"✓ {result.message}")
    elif result.message:
        click.echo(result.message)


def _echo_profile(profile: ModelProfile, *, is_default: bool) -> None:
    title = f"  {profile.name}" + ("  (default)" if is_default else "")
    click.echo(f"\n{'─' * 44}")
    click.echo(title)
    click.echo(f"{'─' * 44}")
    click.echo(f"  {'id':16s}: {profile.id}")
    click.echo(f"  {'provider':16s}: {profile.provider or '(not set)'}")
    click.echo(f"  {'type':16s}: {profile.type or '(not set)'}")
    click.echo(f"  {'model_id':16s}: {profile.model_id or '(not set)'}")
    if profile.url:
        click.echo(f"  {'url':16s}: {profile.url}")
    key = mask_secret(profile.secret.get_secret_value()) or "(not set)"
    click.echo(f"  {'api_key':16s}: {key}")
    aliases = ", ".join(f"@{a}" for a in profile.aliases) or "(none)"
    click.echo(f"  {'aliases':16s}: {aliases}")
    if profile.note:
        click.echo(f"  {'note':16s}: {profile.note}")


def _lookup(ctx: click.Context, ref: str) -> ModelProfile:
    result = _repo(ctx).find_model(ref)
    if not result.ok:
        _fail(result)
    return result.profile


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


@click.group("models")
def models_group() -> None:
    """Manage model profiles and the default model."""


# ---------------------------------------------------------------------------
# list / show / find
# ---------------------------------------------------------------------------


@models_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show all configured models."""
    settings = _repo(ctx).load_settings()
    if not settings.models:
        click.echo("No models configured. Run 'gitgen models add'.")
        return

    click.echo("\n=== Models ===")
    for profile in settings.models:
        _echo_profile(
            profile,
            is_default=profile.id == settings.default_model_id,
        )
    if default_is_dangling(settings):
        click.echo(
            click.style(
                f"\nDefault model '{settings.default_model_id}' no longer "
                "exists. Run 'gitgen models heal'.",
                fg="yellow",
            ),
        )
    click.echo()


@models_group.command("show")
@click.argument("ref")
@click.pass_context
def show_cmd(ctx: click.Context, ref: str) -> None:
    """Show one model by id, name or alias."""
    profile = _lookup(ctx, ref)
    settings = _repo(ctx).load_settings()
    _echo_profile(profile, is_default=profile.id == settings.default_model_id)
    click.echo()


@models_group.command("find")
@click.argument("partial")
@click.pass_context
def find_cmd(ctx: click.Context, partial: str) -> None:
    """List models whose id, name or alias contains PARTIAL."""
    matches = _repo(ctx).get_models_by_partial_match(partial)
    if not matches:
        click.echo(f"No models match '{partial}'.")
        raise SystemExit(1)
    for profile in matches:
        aliases = ", ".join(f"@{a}" for a in profile.aliases)
        suffix = f" ({aliases})" if aliases else ""
        click.echo(f"  {profile.name} [{profile.id}]{suffix}")


# ---------------------------------------------------------------------------
# add / update / delete
# ---------------------------------------------------------------------------


@models_group.command("add")
@click.option("--name", default=None, help="Unique model name")
@click.option("--provider", default="", help="Provider identifier")
@click.option("--type", "type_", default="", help="Backend API type")
@click.option("--url", default="", help="Provider endpoint URL")
@click.option("--model-id", default="", help="Model id used in API calls")
@click.option("--api-key", default=None, help="API key (prompted if omitted)")
@click.option(
    "--no-auth",
    is_flag=True,
    default=False,
    help="Endpoint does not need an API key",
)
@click.option("--alias", "aliases", multiple=True, help="Alias (repeatable)")
@click.option("--temperature", type=float, default=None)
@click.option("--max-output-tokens", type=int, default=None)
@click.option("--note", default=None)
@click.option(
    "--set-default",
    is_flag=True,
    default=False,
    help="Make this the default model",
)
@click.pass_context
def add_cmd(
    ctx: click.Context,
    name: Optional[str],
    provider: str,
    type_: str,
    url: str,
    model_id: str,
    api_key: Optional[str],
    no_auth: bool,
    aliases: Tuple[str, ...],
    temperature: Optional[float],
    max_output_tokens: Optional[int],
    note: Optional[str],
    set_default: bool,
) -> None:
    """Add a new model profile."""
    if not name:
        name = click.prompt("Model name").strip()
    if api_key is None and not no_auth:
        api_key = click.prompt(
            "API key",
            default="",
            hide_input=True,
            show_default=False,
        )

    fields = {}
    if temperature is not None:
        fields["temperature"] = temperature
    if max_output_tokens is not None:
        fields["max_output_tokens"] = max_output_tokens

    profile = ModelProfile(
        name=name,
        provider=provider,
        type=type_,
        url=url,
        model_id=model_id,
        secret=SecretStr(api_key or ""),
        requires_auth=not no_auth,
        aliases=list(aliases),
        note=note,
        **fields,
    )
    _report(_repo(ctx).add_model(profile, set_default=set_default))


@models_group.command("update")
@click.argument("ref")
@click.option("--name", default=None, help="New model name")
@click.option("--provider", default=None)
@click.option("--type", "type_", default=None)
@click.option("--url", default=None)
@click.option("--model-id", default=None)
@click.option("--api-key", default=None)
@click.option("--temperature", type=float, default=None)
@click.option("--max-output-tokens", type=int, default=None)
@click.option("--note", default=None)
@click.pass_context
def update_cmd(
    ctx: click.Context,
    ref: str,
    name: Optional[str],
    provider: Optional[str],
    type_: Optional[str],
    url: Optional[str],
    model_id: Optional[str],
    api_key: Optional[str],
    temperature: Optional[float],
    max_output_tokens: Optional[int],
    note: Optional[str],
) -> None:
    """Change fields of an existing model."""
    profile = _lookup(ctx, ref)
    changes = {
        "name": name,
        "provider": provider,
        "type": type_,
        "url": url,
        "model_id": model_id,
        "temperature": temperature,
        "max_output_tokens": max_output_tokens,
        "note": note,
    }
    update = {k: v for k, v in changes.items() if v is not None}
    if api_key is not None:
        update["secret"] = SecretStr(api_key)
    if not update:
        click.echo("Nothing to update.")
        return
    _report(_repo(ctx).update_model(profile.model_copy(update=update)))


@models_group.command("delete")
@click.argument("ref")
@click.option("--yes", is_flag=True, default=False, help="Skip confirmation")
@click.pass_context
def delete_cmd(ctx: click.Context, ref: str, yes: bool) -> None:
    """Delete a model profile."""
    profile = _lookup(ctx, ref)
    if not yes and not click.confirm(
        f"Delete model '{profile.name}'?",
        default=False,
    ):
        click.echo("Cancelled.")
        return
    _report(_repo(ctx).delete_model(profile.id))


# ---------------------------------------------------------------------------
# default / heal
# ---------------------------------------------------------------------------


@models_group.command("set-default")
@click.argument("ref")
@click.pass_context
def set_default_cmd(ctx: click.Context, ref: str) -> None:
    """Make REF the default model."""
    _report(_repo(ctx).set_default_model(ref))


@models_group.command("default")
@click.option(
    "--heal/--no-heal",
    default=True,
    help="Offer to repair a default that no longer exists",
)
@click.pass_context
def default_cmd(ctx: click.Context, heal: bool) -> None:
    """Show the default model."""
    repo = _repo(ctx)
    profile = repo.get_default_model()
    if profile is not None:
        click.echo(f"{profile.name} [{profile.id}]")
        return
    if not default_is_dangling(repo.load_settings()):
        click.echo("No models configured.")
        raise SystemExit(1)
    if not heal:
        click.echo(
            click.style(
                "The default model no longer exists. "
                "Run 'gitgen models heal'.",
                fg="yellow",
            ),
        )
        raise SystemExit(1)
    _run_heal(repo)
    profile = repo.get_default_model()
    click.echo(f"{profile.name} [{profile.id}]")


def _run_heal(repo: SettingsRepository) -> None:
    status = repo.heal_default_model(ClickModelChooser())
    if status is HealStatus.HEALTHY:
        click.echo("Default model configuration is valid.")
    elif not status.succeeded:
        click.echo(
            click.style("Default model was not repaired.", fg="red"),
            err=True,
        )
        raise SystemExit(1)


@models_group.command("heal")
@click.pass_context
def heal_cmd(ctx: click.Context) -> None:
    """Pick a new default when the current one no longer exists."""
    _run_heal(_repo(ctx))


# ---------------------------------------------------------------------------
# alias
# ---------------------------------------------------------------------------


@models_group.group("alias")
def alias_group() -> None:
    """Manage model aliases."""


@alias_group.command("add")
@click.argument("ref")
@click.argument("alias")
@click.pass_context
def alias_add_cmd(ctx: click.Context, ref: str, alias: str) -> None:
    """Add ALIAS to model REF."""
    _report(_repo(ctx).add_alias(ref, alias))


@alias_group.command("remove")
@click.argument("ref")
@click.argument("alias")
@click.pass_context
def alias_remove_cmd(ctx: click.Context, ref: str, alias: str) -> None:
    """Remove ALIAS from model REF."""
    _report(_repo(ctx).remove_alias(ref, alias))


@alias_group.command("list")
@click.argument("ref")
@click.pass_context
def alias_list_cmd(ctx: click.Context, ref: str) -> None:
    """List the aliases of model REF."""
    profile = _lookup(ctx, ref)
    if not profile.aliases:
        click.echo(f"Model '{profile.name}' has no aliases.")
        return
    for alias in profile.aliases:
        click.echo(f"@{alias}")
