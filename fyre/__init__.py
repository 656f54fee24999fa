"""fyre - Flutter development automation."""

__version__ = "0.1.0"
