"""agentdeck CLI commands."""
