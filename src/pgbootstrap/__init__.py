"""pgbootstrap — declarative PostgreSQL service configuration and bootstrap."""

__version__ = "0.1.0"
