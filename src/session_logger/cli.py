import typer

from session_logger.commands import archives, emit, rotate, show_config

app = typer.Typer(help="Inspect and maintain session_logger log trees.")

# Add commands from different modules
app.add_typer(show_config.app)
app.add_typer(rotate.app)
app.add_typer(archives.app)
app.add_typer(emit.app)

if __name__ == "__main__":
    app()
