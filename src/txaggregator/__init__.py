"""Bank-statement CSV import pipeline with transaction queries and statistics."""

__version__ = "0.1.0"
