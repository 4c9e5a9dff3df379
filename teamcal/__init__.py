"""TeamCal: cookie-session auth, user approval and a shared calendar over one JSON document."""

__version__ = "1.0.0"
