"""Local support-ticket manager with a session-guarded router."""

__version__ = "0.1.0"
