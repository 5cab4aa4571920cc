"""Docsite - documentation website server for static content trees."""

__version__ = "0.1.0"
