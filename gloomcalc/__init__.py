"""Shield / Pierce damage calculator for Gloomhaven-style combat."""

__version__ = "0.1.0"
