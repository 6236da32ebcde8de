"""WhereTo account authentication: passwords, sessions and password resets."""

__version__ = "0.1.0"
