"""Terminal presentation layer (Typer + Rich)."""
