"""Search utilities for scene hierarchies."""
