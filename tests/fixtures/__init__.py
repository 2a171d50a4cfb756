"""Shared pytest fixtures and helpers for book tests."""

from .books import *  # noqa: F401,F403
