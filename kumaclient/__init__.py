"""Models and JSON serialisation for Uptime Kuma monitors, notifications and proxies."""

__version__ = "0.1.0"