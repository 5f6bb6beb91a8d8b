"""
Interactive prompts backed by questionary.

Both prompts return None when the user aborts (Ctrl-C), which callers treat
as a cancelled selection.
"""

from typing import Optional, Sequence

import questionary

from .utils.labels import ProfileChoice

__all__ = ['QuestionaryPrompt']


class QuestionaryPrompt:
    """Select and confirm prompts for the terminal."""

    def __init__(self, style: Optional[questionary.Style] = None):
        self.style = style

    def select(self, choices: Sequence[ProfileChoice], default_index: int = 0) -> Optional[str]:
        """
        Ask the user to pick one profile.

        Args:
            choices: Labeled profiles in display order
            default_index: Position of the preselected choice

        Returns:
            The selected profile name, or None if cancelled
        """
        options = [questionary.Choice(c.label, value=c.name) for c in choices]
        default = options[default_index] if 0 <= default_index < len(options) else None
        return questionary.select(
            "Select an AWS profile:",
            choices=options,
            default=default,
            style=self.style,
        ).ask()

    def confirm(self, message: str) -> Optional[bool]:
        return questionary.confirm(message, default=True, style=self.style).ask()
