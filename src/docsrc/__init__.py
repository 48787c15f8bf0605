"""docsrc: resolve import paths to hosting providers and fetch documentation sources."""

__version__ = "1.0.0"
