"""Block plugins discovered by the host at startup."""
