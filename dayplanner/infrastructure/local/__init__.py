"""In-process implementations."""
