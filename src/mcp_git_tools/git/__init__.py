"""GitPython binding, output parsers and request models for MCP Git Tools"""

from .models import *  # noqa: F401,F403
from .provider import GitPythonProvider, GitProviderFactory, get_git

__all__ = [
    "GitPythonProvider",
    "GitProviderFactory",
    "get_git",
]
