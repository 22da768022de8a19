"""Filesystem services used by the removal phase."""
