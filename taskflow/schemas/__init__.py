"""Request contracts and response views."""
