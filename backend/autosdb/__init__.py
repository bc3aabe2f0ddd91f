"""auto-sdb: regulatory field extraction from safety data sheet text."""

__version__ = "0.1.0"
