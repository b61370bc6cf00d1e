"""Logger facade and the process termination path."""
