# -*- coding: utf-8 -*-
"""Interactive prompt helpers shared by CLI commands."""
from __future__ import annotations

from typing import List, Optional, Sequence

import click


def prompt_choice(
    prompt_text: str,
    options: Sequence[str],
    *,
    allow_cancel: bool = False,
) -> Optional[int]:
    """Show a numbered list and return the 0-based index of the choice.

    With *allow_cancel*, entering 0 returns ``None``.
    """
    if not options:
        raise click.UsageError("Nothing to choose from.")
    click.echo(prompt_text)
    for i, label in enumerate(options, start=1):
        click.echo(f"  [{i}] {label}")
    lowest = 0 if allow_cancel else 1
    hint = ", 0 to cancel" if allow_cancel else ""
    index = click.prompt(
        f"Enter choice (1-{len(options)}{hint})",
        type=click.IntRange(lowest, len(options)),
    )
    if index == 0:
        return None
    return index - 1


class ClickModelChooser:
    """Terminal implementation of the healer's chooser; 0 aborts."""

    def notify(self, message: str) -> None:
        click.echo(click.style(message, fg="yellow"))

    def choose(self, prompt: str, options: List[str]) -> Optional[int]:
        try:
            return prompt_choice(prompt, options, allow_cancel=True)
        except click.Abort:
            return None
