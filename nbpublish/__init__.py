"""Publish Jupyter notebooks as static-site blog posts."""

__version__ = "0.1.0"
