"""RocketCart - stock-aware shopping cart with durable persistence."""

__version__ = "0.1.0"
