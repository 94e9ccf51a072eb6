"""Race Tracker: personal race catalog and statistics API."""

__version__ = "0.1.0"
