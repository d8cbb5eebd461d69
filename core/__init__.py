"""Application wiring, configuration and the interactive command loop."""
