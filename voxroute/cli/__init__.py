"""CLI module for voxroute."""
