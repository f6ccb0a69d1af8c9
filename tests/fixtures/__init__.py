"""Shared pytest fixtures for the catalog tests."""

from .api import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
