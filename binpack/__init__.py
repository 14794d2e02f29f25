"""Package multi-platform binaries as npm packages with a runtime dispatcher."""

__version__ = "0.1.0"
