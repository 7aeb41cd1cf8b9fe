"""Local mock servers for third-party APIs."""
