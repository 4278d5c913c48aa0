"""OceanWatch infrastructure adapters."""
