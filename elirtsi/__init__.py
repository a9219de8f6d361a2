"""Client for the RTSI real-time data interface of Elite CS series robots."""

__version__ = "1.2.0"