"""Validation, client and server configuration, output formatting, error mapping,
import chunking and argument parsing for router hosts-file management."""

__version__ = "0.1.0"