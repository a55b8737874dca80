"""Camera module: the fixed-eye viewport."""
