"""Test configuration and fixtures for fernql."""

import logging

from dotenv import load_dotenv
import pytest

from fernql import FernParams
from tests.schema import build_schema

# Try to load environment variables from .env file
load_dotenv()


@pytest.fixture(autouse=True)
def fernql_debug_logging(caplog):
    """Capture fernql logs at debug level so failing tests show the pipeline trace."""
    caplog.set_level(logging.DEBUG, logger="fernql")
    yield


@pytest.fixture(scope="function")
def fern_schema():
    """A freshly built demo registry per test."""
    return build_schema()


@pytest.fixture(scope="function")
def context():
    return {'events': []}


@pytest.fixture(scope="function")
def params():
    return FernParams()
