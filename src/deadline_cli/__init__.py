"""Deadline CLI - time-boxed solo and group deadlines from the terminal."""

__version__ = "0.1.0"
