"""Server configuration commands."""
