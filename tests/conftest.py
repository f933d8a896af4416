"""Shared fixtures for call stack chart tests."""

from __future__ import annotations

import pytest


class RecordingBackend:
    """Backend double that records every call instead of plotting."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def new_plot(self, target_id: str, data: list[dict], layout: dict, options: dict) -> None:
        self.calls.append(("new_plot", target_id, data, layout, options))

    def append_link(self, target_id: str, text: str, href: str) -> None:
        self.calls.append(("append_link", target_id, text, href))


@pytest.fixture
def chart_options() -> dict:
    """Options for a call returning 4 bytes in a register, with one argument and a saved link register."""

    return {
        "id": "call-stack-chart",
        "title": "foo(x)",
        "returnValueSize": 4,
        "returnValueOnCallStack": False,
        "callArgs": [{"name": "x", "size": 4, "color": "red"}],
        "linkRegister": True,
        "padding": 4,
        "yMax": 32,
    }


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()
