import pytest

from intake_pathways.registry import PathwayRegistry


@pytest.fixture(scope="session")
def registry():
    """Load the packaged pathway data once for the entire test session."""
    r = PathwayRegistry()
    r.load()
    return r
