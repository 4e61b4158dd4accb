"""Team calendar backend: notification fan-out and reminder service."""
