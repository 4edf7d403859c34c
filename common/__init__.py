# common/__init__.py
"""Shared logging and coefficient-set configuration for the filter model."""

from . import logging as logging  # re-export submodule
from . import config as config    # re-export submodule

__all__ = ["logging", "config"]
__version__ = "0.2.0"
