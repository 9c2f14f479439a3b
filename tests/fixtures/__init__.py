"""Shared pytest fixtures."""

from .api import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .data import *  # noqa: F401,F403
from .services import *  # noqa: F401,F403
