"""OceanWatch domain packages."""
