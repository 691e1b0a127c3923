"""HTTP value types."""
