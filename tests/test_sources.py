"""Tests for readmegen.sources."""

from __future__ import annotations

from readmegen.sources import PlaceholderContentSource, truncate


def test_generic_body_mentions_project() -> None:
    body = PlaceholderContentSource().file_contents(
        "https://github.com/octo/tool", project_name="Tool", description="Converts files."
    )

    assert "https://github.com/octo/tool" in body
    assert 'console.log("Initializing Tool");' in body


def test_portfolio_projects_get_frontend_sample() -> None:
    body = PlaceholderContentSource().file_contents(
        "https://github.com/octo/me", project_name="My Portfolio", description="Showcase."
    )

    assert "frontend/portfolio project" in body


def test_store_projects_get_backend_sample() -> None:
    body = PlaceholderContentSource().file_contents(
        "https://github.com/octo/shop",
        project_name="Shop",
        description="An e-commerce platform built on the MERN stack.",
    )

    assert "e-commerce/backend project" in body


def test_description_preview_is_bounded() -> None:
    body = PlaceholderContentSource().file_contents(
        "https://github.com/octo/tool", project_name="Tool", description="x" * 500
    )

    assert "x" * 150 in body
    assert "x" * 151 not in body


def test_selection_is_deterministic() -> None:
    source = PlaceholderContentSource()
    args = ("https://github.com/octo/tool",)
    kwargs = {"project_name": "Tool", "description": "A backend API"}

    assert source.file_contents(*args, **kwargs) == source.file_contents(*args, **kwargs)


def test_body_is_truncated_to_limit() -> None:
    body = PlaceholderContentSource(max_chars=60).file_contents(
        "https://github.com/octo/tool", project_name="Tool", description="Converts files."
    )

    assert len(body) == 60
    assert body.endswith("\n... (truncated)")


def test_truncate_leaves_short_text_alone() -> None:
    assert truncate("short", 10) == "short"
    assert truncate("abcdefghijklmnopqrstuvwxyz", 20) == "abcd\n... (truncated)"
