"""HTTP service for runtime-defined JSON endpoints."""

__version__ = "0.1.0"
