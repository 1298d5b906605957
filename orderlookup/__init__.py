"""Order lookup service: resolves order identifiers with caching and fallbacks."""

__version__ = "1.0.0"
