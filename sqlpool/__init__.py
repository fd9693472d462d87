"""sqlpool: declarative Azure SQL elastic pool resource adapter."""

__version__ = "0.1.0"
