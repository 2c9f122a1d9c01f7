"""Section rendering: markdown fragments, fenced code files and wrapped files."""
