"""Revision comparison engine internals for RevisionKit."""

__version__ = "0.1.0"
