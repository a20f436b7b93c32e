"""HTTP and WebSocket surface for single-player sessions."""
