"""Core primitives: error taxonomy, configuration, logging."""
