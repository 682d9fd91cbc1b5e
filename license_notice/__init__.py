"""License notice generation for built software products."""

__version__ = "0.1.0"
