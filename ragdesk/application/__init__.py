"""Application layer: services and startup tasks."""
