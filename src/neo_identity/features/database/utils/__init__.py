"""SQL constants and schema helpers."""
