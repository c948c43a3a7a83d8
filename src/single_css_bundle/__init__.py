"""Ship exactly one stylesheet from a code-split frontend build."""
