"""Shared pytest fixtures for library-api tests."""

from tests.fixtures import *  # noqa: F401,F403
