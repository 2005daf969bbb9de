"""Fixtures for the perch examples.

Each example directory holds an ``app.py`` defining a module-level
``app``. The ``client`` fixture runs that file afresh for every test and
wraps the resulting App in a ``TestClient``.
"""

import runpy
from pathlib import Path

import pytest

from perch.app import App
from perch.testing import TestClient


@pytest.fixture
def client(request: pytest.FixtureRequest) -> TestClient:
    """A TestClient around a freshly built ``app`` from the test's ``app.py``."""
    namespace = runpy.run_path(str(Path(request.path).parent / "app.py"))
    app = namespace["app"]
    assert isinstance(app, App)
    return TestClient(app)
