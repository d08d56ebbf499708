"""Detects AutoMapper API usages that break across major versions."""

__version__ = "0.1.0"
