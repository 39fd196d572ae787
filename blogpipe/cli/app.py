"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import articles_app
from .augment import augment_command
from .crawl import crawl_command
from .init import init_command
from .runs import runs_command

app = typer.Typer(
    name="blogpipe",
    help="blogpipe - Blog crawler and AI article augmenter",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("crawl")(crawl_command)
app.command("augment")(augment_command)
app.command("runs")(runs_command)
app.add_typer(articles_app, name="articles", help="Browse stored articles")


if __name__ == "__main__":
    app()
