# formdoc/ui.py
from __future__ import annotations
from typing import Optional, Protocol
import click

class FormUI(Protocol):
    """What the core needs from whatever shows the form to a person."""

    def alert(self, message: str) -> None: ...
    def focus(self, field: str) -> None: ...
    def show_preview(self, text: str) -> None: ...

class ConsoleUI:
    """Terminal front end: alerts go to stderr, the preview to stdout."""

    def __init__(self, show_previews: bool = True):
        self.show_previews = show_previews
        self.focused: Optional[str] = None

    def alert(self, message: str) -> None:
        click.secho(message, fg="red", err=True)

    def focus(self, field: str) -> None:
        self.focused = field

    def show_preview(self, text: str) -> None:
        if not self.show_previews:
            return
        click.echo(click.style("--- preview ---", dim=True))
        click.echo(text)
