"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import os

import pytest

# Keep Matplotlib off any display before pyplot is first imported
os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents repeated ti.init() calls, which reset the
    Taichi runtime.
    """
    from pathtracer.core.film import init_backend

    init_backend("cpu", random_seed=42)
    yield


@pytest.fixture
def sampler():
    """Seeded NumPy sampler."""
    from pathtracer.core.sampler import NumpySampler

    return NumpySampler(seed=1234)


@pytest.fixture
def constant_sampler():
    """Sampler that always returns 0.75."""
    from pathtracer.core.sampler import SequenceSampler

    return SequenceSampler([0.75])


@pytest.fixture
def gray_lambertian():
    from pathtracer.materials import Lambertian

    return Lambertian((0.5, 0.5, 0.5))
