"""Desktop viewer."""
