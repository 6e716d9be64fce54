"""Progress and mastery tracking backend for the Nanobio learning platform."""

__version__ = "0.1.0"
