"""Core infrastructure: extensions, bootstrap, signals and error handling."""
