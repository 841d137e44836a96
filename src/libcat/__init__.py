"""In-memory book catalog with an inverted keyword index."""

__version__ = "0.1.0"
