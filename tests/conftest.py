"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from frontmatter_gen.config import ParseOptions
from frontmatter_gen.context import AppContext
from frontmatter_gen.engine import FrontmatterEngine
from frontmatter_gen.types import Array, Frontmatter, String


@pytest.fixture
def engine() -> FrontmatterEngine:
    """Create a fresh engine."""
    return FrontmatterEngine()


@pytest.fixture
def sample_frontmatter() -> Frontmatter:
    """Frontmatter with a title, a date string and a tag list."""
    return Frontmatter(
        {
            "title": String("My Post"),
            "date": String("2023-05-20"),
            "tags": Array((String("r"), String("b"))),
        }
    )


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.read_text.return_value = ""
    return fs


@pytest.fixture
def mock_context(mock_filesystem: MagicMock) -> AppContext:
    """Create an AppContext with a mock filesystem and a real engine."""
    return AppContext(
        filesystem=mock_filesystem,
        engine=FrontmatterEngine(),
        options=ParseOptions(),
    )


# ============================================================================
# Sample Content Fixtures
# ============================================================================


@pytest.fixture
def sample_yaml_document() -> str:
    """Markdown document with YAML front matter."""
    return """---
title: Hello World
date: 2023-05-20
draft: false
tags:
  - rust
  - python
author:
  name: Ada
  posts: 12
---

# Hello World

First post.
"""


@pytest.fixture
def sample_toml_document() -> str:
    """Markdown document with TOML front matter."""
    return """+++
title = "Hello World"
published = 2023-05-20T10:00:00Z
weight = 1.5

[author]
name = "Ada"
+++

# Hello World
"""


@pytest.fixture
def sample_json_document() -> str:
    """Markdown document with JSON front matter."""
    return """{
  "title": "Hello {World}",
  "count": 3,
  "nested": {"ok": true, "none": null}
}

# Hello World
"""


@pytest.fixture
def document_file(tmp_path: Path, sample_yaml_document: str) -> Path:
    """Write the YAML sample document to disk."""
    path = tmp_path / "post.md"
    path.write_text(sample_yaml_document, encoding="utf-8")
    return path
