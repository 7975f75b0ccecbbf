"""
skillsync - Keeps vendored skill folders in sync with upstream git submodules.
"""

__version__ = "0.1.0"
