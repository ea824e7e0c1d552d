"""cloudscan - find cloud storage files whose names suggest sensitive contents."""

__version__ = "0.1.0"
