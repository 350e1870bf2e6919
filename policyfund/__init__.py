"""Policy-fund matching service."""
