"""
The entry point for the forum-notices CLI, to run the web app and manage notices from a terminal.
"""

import logging
import sys

import typer
import uvicorn

from forum_notices.api_config import settings
from forum_notices.cli_commands.notices_cli import notices_app

logger = logging.getLogger(__name__)


app = typer.Typer(
    help="""
    Forum Notices lets site admins show notices at the top of the forums and topics. \n
        - Run the web app (forums, edit screens and admin panel). \n
        - List and add notices.
    """,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


app.add_typer(notices_app, name="notices")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Address to bind to."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Restart the server when the code changes."),
):
    """Run the web app."""
    uvicorn.run("forum_notices.app:app", host=host, port=port, reload=reload, log_level=settings.api.log_level.lower())


def main():
    logging.basicConfig(level=settings.api.log_level, handlers=[logging.StreamHandler(sys.stdout)])
    logger.info("Starting forum-notices CLI application.")
    app()


if __name__ == "__main__":
    main()
