"""Learning platform host with block plugins."""
