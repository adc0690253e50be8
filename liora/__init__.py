"""
Liora - founder and investor matchmaking backend.
"""

__version__ = "1.0.0"
