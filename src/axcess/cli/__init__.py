"""axcess CLI package."""
