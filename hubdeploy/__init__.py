"""Deploy app and device-driver source to a home-automation hub."""

__version__ = "0.3.0"
