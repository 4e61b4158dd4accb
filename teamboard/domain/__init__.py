"""Domain layer of the notification service."""
