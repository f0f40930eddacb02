"""Pytest configuration and shared fixtures for the notelens test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

from dataclasses import dataclass

import pytest

from notelens.search.types import Element, TextLeaf

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)

    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, property tests will be skipped
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@dataclass
class FakeNote:
    """Stand-in for the host application's note record."""

    id: str
    content: str
    title: str | None = None
    type: str = "text"


@dataclass
class FakeProject:
    """Stand-in for the host application's project record."""

    id: str
    name: str


@pytest.fixture
def sample_document() -> str:
    """Provide raw note text made of headings and plain paragraphs.

    Returns
    -------
    str
        Text whose rendered preview leaves concatenate back to the same text.

    """
    return "Release notes\nThe note editor ships today.\nEvery note keeps its notes list.\nNOTE: notebooks too."


@pytest.fixture
def sample_tree(sample_document: str) -> Element:
    """Provide a preview tree for :func:`sample_document`.

    The raw text is split across headings, paragraphs and inline emphasis
    without adding or dropping characters.

    """
    return Element(
        "div",
        (
            Element("h1", (TextLeaf("Release notes"),)),
            TextLeaf("\n"),
            Element(
                "p",
                (
                    TextLeaf("The "),
                    Element("strong", (TextLeaf("note"),)),
                    TextLeaf(" editor ships today."),
                ),
            ),
            TextLeaf("\n"),
            Element("p", (TextLeaf("Every note keeps its "), Element("em", (TextLeaf("notes"),)), TextLeaf(" list."))),
            TextLeaf("\n"),
            Element("p", (TextLeaf("NOTE: notebooks too."),)),
        ),
    )


@pytest.fixture
def sample_notes() -> list[FakeNote]:
    """Provide a mixed list of text and file notes."""
    return [
        FakeNote(id="n1", content="Groceries: milk, eggs"),
        FakeNote(id="n2", content="Meeting notes\n" + "Discussed the quarterly roadmap in detail. " * 3),
        FakeNote(id="n3", content="https://example.com/roadmap.pdf", title="Roadmap.pdf", type="file"),
        FakeNote(id="n4", content="data:image/png;base64,AAAA", title="whiteboard.png", type="image"),
    ]


@pytest.fixture
def sample_projects() -> list[FakeProject]:
    """Provide a few projects."""
    return [FakeProject(id="p1", name="Roadmap 2025"), FakeProject(id="p2", name="Household")]
