"""Birthday alerts for scout membership registry exports."""

__version__ = "0.1.0"
