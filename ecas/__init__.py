"""Asynchronous computation graphs, CPU operators and streaming utilities."""

__version__ = "0.1.0"