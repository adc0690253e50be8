"""
Providers package.
Import all provider modules to register them with the registry.
"""

# Import provider modules to trigger registration
from liora.providers import llm
from liora.providers import upload

__all__ = ["llm", "upload"]
