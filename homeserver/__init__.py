"""Lifecycle management for the services of a Docker based home server."""

__version__ = "0.1.0"
