"""Request pipeline and the two execution-mode adapters."""
