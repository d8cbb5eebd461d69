"""Console rendering, input prompting and the typer CLI."""
