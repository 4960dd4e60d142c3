"""Production adapters for the processor ports."""
