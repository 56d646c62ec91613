"""CharForge: AI character preference translation and evaluation harness."""

__version__ = "0.3.0"
