"""Blocking notification for a failed completion."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static


class CompletionErrorModal(ModalScreen[None]):
    """Centered modal telling staff a ticket could not be marked done."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("enter", "close", "Close"),
        ("q", "close", "Close"),
    ]

    CSS = """
    CompletionErrorModal {
        align: center middle;
        background: $background 60%;
    }

    #completion-error-dialog {
        width: 64;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #completion-error-title {
        text-style: bold;
        margin-bottom: 1;
        color: #ffb3b3;
    }

    #completion-error-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, order_id: str, message: str) -> None:
        super().__init__()
        self.order_id = order_id
        self.message = message

    def compose(self) -> ComposeResult:
        with Container(id="completion-error-dialog"):
            yield Static(f"Order #{self.order_id}", id="completion-error-title")
            yield Static(f"Failed to complete order: {self.message}", id="completion-error-body")
            yield Static("Enter / Esc / q to close. Press Enter on the ticket to retry.", id="completion-error-help")

    def action_close(self) -> None:
        self.dismiss()
