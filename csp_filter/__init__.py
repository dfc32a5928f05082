"""Content-Security-Policy header middleware and violation report logging."""
