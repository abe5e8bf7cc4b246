"""Use-case layer: domain decisions plus structured logging."""
