"""
Interactive prompts used by the device flows.
"""

from typing import List

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from mobile_helper.console import console


def select(message: str, choices: List[str]) -> str:
    """Ask the user to pick one entry of `choices` by its number.

    Returns:
        The selected choice
    """
    if not choices:
        raise ValueError(f"No choices available for: {message}")

    console.print(f"[bold]{message}[/]")
    for number, choice in enumerate(choices, start=1):
        console.print(f"  {number}. {escape(choice)}")

    numbers = [str(number) for number in range(1, len(choices) + 1)]
    answer = Prompt.ask("Enter a number", choices=numbers, console=console, show_choices=False)
    return choices[int(answer) - 1]


def ask(message: str) -> str:
    """Read a line of free text."""
    return Prompt.ask(message, console=console).strip()


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return Confirm.ask(message, console=console, default=default)
