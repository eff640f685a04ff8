"""Socket.IO handlers and shared payload validation."""
