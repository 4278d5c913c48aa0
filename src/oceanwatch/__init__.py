"""OceanWatch hazard-report administration: permanent report deletion."""
