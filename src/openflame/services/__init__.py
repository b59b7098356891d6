"""Framework services wired up by the default recipe table."""
