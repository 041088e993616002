"""
libforge CLI - command-line interface for libforge builds
"""

__version__ = "0.1.0"
