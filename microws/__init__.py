"""Building blocks for a small HTTP and WebSocket server: backpressure, pub/sub, caching, file serving and option parsing."""

__version__ = "0.1.0"