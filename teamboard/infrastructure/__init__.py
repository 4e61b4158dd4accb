"""Infrastructure adapters: persistence, realtime delivery and scheduling."""
