"""Campus Flow core: registry engine, configuration, and shared utilities."""
