"""HTTP boundary for voxroute."""
