"""Number log sources."""
