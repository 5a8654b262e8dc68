"""Command line interface for RevisionKit."""
