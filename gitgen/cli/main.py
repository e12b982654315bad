# -*- coding: utf-8 -*-
"""Entry point for the ``gitgen`` command."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..constant import LOG_LEVEL_ENV
from ..settings import SettingsRepository, SettingsStoreError
from ..utils.logging import resolve_log_level, setup_logger
from .models_cmd import models_group

logger = logging.getLogger(__name__)


class GitGenGroup(click.Group):
    """Turns settings store failures into a clean exit with status 2."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except SettingsStoreError as exc:
            logger.debug("Settings store failure", exc_info=True)
            click.echo(click.style(f"Error: {exc}", fg="red"), err=True)
            ctx.exit(2)


@click.group(cls=GitGenGroup)
@click.version_option(__version__, prog_name="gitgen")
@click.option("--debug", is_flag=True, default=False, help="Verbose logs")
@click.option(
    "--settings-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Use this encrypted settings file instead of ~/.gitgen",
)
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    settings_file: Optional[Path],
) -> None:
    """Manage the models used to generate commit messages."""
    setup_logger(resolve_log_level(debug, os.environ.get(LOG_LEVEL_ENV)))
    ctx.ensure_object(dict)
    if settings_file is not None:
        ctx.obj["repo"] = SettingsRepository.at(settings_file)
    else:
        ctx.obj["repo"] = SettingsRepository()


cli.add_command(models_group)


def main() -> None:
    cli(prog_name="gitgen")


if __name__ == "__main__":
    main()
