"""Shared test fixtures for the hexasphere tests."""

import pytest

from hexasphere import Hexasphere


@pytest.fixture
def level0_sphere():
    """A level-0 sphere of radius 1 without height displacement."""
    sphere = Hexasphere()
    sphere.generate(seed=7, radius=1.0, subdivision_level=0, height_scale=0.0)
    return sphere


@pytest.fixture
def level2_sphere():
    """A level-2 sphere with visible height displacement."""
    sphere = Hexasphere()
    sphere.generate(seed=42, radius=5.0, subdivision_level=2, height_scale=0.1)
    return sphere
