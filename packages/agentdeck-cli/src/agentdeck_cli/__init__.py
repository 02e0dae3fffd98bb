"""agentdeck command-line interface."""
