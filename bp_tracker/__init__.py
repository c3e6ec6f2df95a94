"""BP Tracker: async client and view state for a blood pressure readings API."""

__version__ = "1.0.0"
