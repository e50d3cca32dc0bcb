"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QObject, Signal  # noqa: E402

from scribeline.history.authors import Author  # noqa: E402


class FakeEditor(QObject):
    """Minimal stand-in for ``QPlainTextEdit`` that records programmatic writes."""

    textChanged = Signal()  # noqa: N815 - Qt style API

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self._text = text
        self.writes: list[str] = []

    def toPlainText(self) -> str:  # noqa: N802 - Qt style API
        return self._text

    def setPlainText(self, text: str) -> None:  # noqa: N802 - Qt style API
        self._text = text
        self.writes.append(text)
        self.textChanged.emit()

    def type_text(self, text: str) -> None:
        """Simulate the user replacing the buffer through the keyboard."""

        self._text = text
        self.textChanged.emit()


@pytest.fixture(scope="session")
def qt_app():
    """Provide a shared QApplication instance for widget tests."""

    from PySide6.QtWidgets import QApplication

    return QApplication.instance() or QApplication([])


@pytest.fixture
def fake_editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture
def alice() -> Author:
    return Author("alice", "Alice", "human", "#3366cc")


@pytest.fixture
def bob() -> Author:
    return Author("bob", "Bob", "human", "#ff6600")
