"""Linode provider — resource drivers for Linode API entities."""

__version__ = "0.1.0"
