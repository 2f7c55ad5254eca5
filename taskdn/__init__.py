"""taskdn - manual ordering of tasks and headings across containers."""

__version__ = "0.1.0"
