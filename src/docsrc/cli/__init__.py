"""Command line interface for docsrc."""
