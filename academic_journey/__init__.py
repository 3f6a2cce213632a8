"""Academic Journey: student performance tracking API."""

__version__ = "1.0.0"
