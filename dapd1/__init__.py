"""DAP/DataONE datasets catalog."""

__version__ = "0.1.0"
