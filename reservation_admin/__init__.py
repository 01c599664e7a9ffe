"""Administrative client for the venue/equipment/event reservation backend."""

__version__ = "0.1.0"
