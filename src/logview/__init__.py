"""logview: config-file ingestion and log-format presets for an access-log analyzer CLI."""

__version__ = "0.1.0"
