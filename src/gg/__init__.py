"""gg: a git porcelain."""
