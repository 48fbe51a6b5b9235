"""Commerce generate: synthetic commerce products for development environments."""

__version__ = "0.1.0"
