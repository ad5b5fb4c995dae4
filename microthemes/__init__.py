"""microthemes: path-based microsite themes."""
