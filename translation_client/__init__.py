"""Remote-service-backed translation loader with manifest-validated caching."""

__version__ = "1.0.0"
