"""Shared fixtures for the truncation solver tests."""

import pytest

from icosa_truncation import SolverContext, list_configurations, run_configuration


@pytest.fixture(scope="session")
def context():
    """Context with the face symmetry and reference triangle built."""
    return SolverContext.create()


@pytest.fixture(scope="session")
def symmetry(context):
    return context.symmetry


@pytest.fixture(scope="session")
def solutions(context):
    """Every registered configuration, solved once."""
    return {key: run_configuration(context, key) for key in list_configurations()}
