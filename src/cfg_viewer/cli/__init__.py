"""Command line interface for cfg-viewer."""
