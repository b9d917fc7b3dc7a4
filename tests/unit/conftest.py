"""Unit test configuration.

Unit tests should be fast and isolated - no network and no external
database. Repository-backed tests use the in-memory SQLite fixture.
"""

import pytest


# Mark all tests in this directory as unit tests
pytestmark = pytest.mark.unit
