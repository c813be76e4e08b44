"""GitPatrol — obfuscated JavaScript scanner for source trees."""

__version__ = "1.0.0"
