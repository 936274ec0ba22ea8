"""Configuration: settings-file discovery, models, tool settings, logging."""
