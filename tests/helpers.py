from __future__ import annotations

from typing import List, Optional

from gitgen.settings import GitGenSettings, ModelProfile


def make_profile(
    id: str,
    name: str,
    aliases: Optional[List[str]] = None,
    **fields,
) -> ModelProfile:
    return ModelProfile(id=id, name=name, aliases=list(aliases or []), **fields)


def make_settings(
    *profiles: ModelProfile,
    default: Optional[str] = None,
) -> GitGenSettings:
    return GitGenSettings(models=list(profiles), default_model_id=default)


class ScriptedChooser:
    """Chooser that replays canned answers and records what it was shown."""

    def __init__(self, *answers: Optional[int]) -> None:
        self.answers = list(answers)
        self.messages: List[str] = []
        self.prompts: List[List[str]] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def choose(self, prompt: str, options: List[str]) -> Optional[int]:
        self.prompts.append(list(options))
        return self.answers.pop(0)
