"""Shared test configuration and fixtures for flughafen tests."""

from pathlib import Path
from typing import Callable

import pytest

from flughafen.classification.file_context import FileContext
from flughafen.expressions.types import EnhancedWorkflowContext, WorkflowContext
from flughafen.pipeline import Pipeline


@pytest.fixture
def sample_workflow():
    """Standard valid workflow for testing."""
    return """name: CI
on:
  push:
    branches: [main]
  pull_request:
    branches: [main]

jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - name: Checkout
        uses: actions/checkout@v4
      - id: setup
        name: Setup Node
        uses: actions/setup-node@v4
        with:
          node-version: '20'
      - name: Test
        run: npm test
        env:
          NODE_VERSION: ${{ steps.setup.outputs.node-version }}
"""


@pytest.fixture
def sample_action():
    return """name: Greet
description: Says hello
inputs:
  who:
    description: Who to greet
    required: true
runs:
  using: composite
  steps:
    - name: Hello
      run: echo "Hello ${{ inputs.who }}"
      shell: bash
"""


@pytest.fixture
def sample_funding():
    return """github: [octocat, hubot]
patreon: octocat
ko_fi: null
custom: https://example.com/donate
"""


@pytest.fixture
def sample_dependabot():
    return """version: 2
updates:
  - package-ecosystem: pip
    directory: /
    schedule:
      interval: weekly
"""


@pytest.fixture
def push_context():
    return WorkflowContext(event_type="push", available_jobs={"build", "test"})


@pytest.fixture
def job_context():
    """Context of an expression inside job ``test`` after a step with id ``setup``."""
    return EnhancedWorkflowContext(
        event_type="push",
        available_jobs={"build", "test"},
        current_job="test",
        available_steps={"setup"},
    )


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``content`` to ``relative`` under a temporary project root."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def pipeline():
    return Pipeline()


@pytest.fixture
def file_context():
    """Factory for FileContext instances."""
    return FileContext.create
