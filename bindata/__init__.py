"""Scan files and write Go source code that embeds their contents."""

__version__ = "4.0.0"