"""Core infrastructure: bootstrap, logging, errors, signals, module registry."""
