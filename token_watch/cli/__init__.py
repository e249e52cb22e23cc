"""Command-line entry points: token-watch <command> [args...]."""
