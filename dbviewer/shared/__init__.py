"""Shared infrastructure for the dbviewer CLI."""
