"""Infrastructure: logging setup and the logging-backed fault sink."""
