"""passhash — deterministic site passwords from a master key and a site tag."""

__version__ = "0.1.0"
