"""Two-stage AI icon generator: prompt enhancement, then image synthesis."""

__version__ = "1.0.0"
