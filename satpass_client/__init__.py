"""satpass client: REST API access and display-theme handling for the satpass web UI."""

__version__ = "0.1.0"
