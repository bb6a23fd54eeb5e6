"""External collaborators: shop API client, notification sinks, money helpers."""
