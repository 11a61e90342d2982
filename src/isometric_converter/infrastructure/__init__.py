"""Process-level helpers such as progress reporting."""
