"""CLI commands for listing and adding forum notices."""

import logging

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from forum_notices.api_config import settings
from forum_notices.crud.posts import create_post, get_post_meta
from forum_notices.db import SessionLocal, create_all_tables
from forum_notices.host.context import HostContext, build_host_context
from forum_notices.host.hooks import HostEvent
from forum_notices.host.plugin_loader import boot_host
from forum_notices.models.posts import PostStatus
from forum_notices.plugins.bbpress_notices import (
    NOTICE_POST_TYPE,
    NOTICE_TYPE_FIELD,
    NOTICE_TYPE_META_KEY,
    NoticesPlugin,
    load_notices_plugin,
)
from forum_notices.schemas.posts import NoticeResponse

logger = logging.getLogger(__name__)

COLOR_MAPPING = {
    "info": "blue",
    "error": "red",
}

notices_app = typer.Typer(no_args_is_help=True, help="List and add the notices shown above the forums and topics.")


def _boot() -> tuple[HostContext, NoticesPlugin]:
    create_all_tables()
    host = build_host_context(settings)
    boot_host(host)
    return host, load_notices_plugin(host)


@notices_app.command("list")
def list_notices():
    """List all published notices, in the order they are shown on the forums."""
    _, plugin = _boot()

    with SessionLocal() as db:
        notices = [
            NoticeResponse(
                id=notice.id,
                title=notice.title,
                content=notice.content,
                notice_type=get_post_meta(db=db, post_id=notice.id, meta_key=NOTICE_TYPE_META_KEY),
                created_at=notice.created_at,
            )
            for notice in plugin.get_notices(db)
        ]

    if not notices:
        print("No published notices found.")
        return

    console = Console()
    table = Table(title="Published notices")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Title", style="magenta")
    table.add_column("Content")

    for notice in notices:
        color = COLOR_MAPPING.get(notice.notice_type)
        notice_type = notice.notice_type or "default"
        table.add_row(
            str(notice.id),
            f"[{color}]{notice_type}[/{color}]" if color else notice_type,
            notice.title or "(no title)",
            notice.content,
        )

    console.print(table)


@notices_app.command("add")
def add_notice(
    content: str = typer.Argument(help="Text of the notice, blank lines separate paragraphs.", show_default=False),
    title: str = typer.Option("", help="Title of the notice, only shown in the admin screens."),
    notice_type: str = typer.Option("", "--type", help="Notice type: info, error, or leave empty for the default."),
    status: PostStatus = typer.Option(PostStatus.PUBLISH, help="Status of the new notice."),
):
    """Add a notice, published straight away unless another status is given."""
    host, _ = _boot()
    if not host.content_types.exists(NOTICE_POST_TYPE):
        print("[bold red]Notices are not available: the forum system is disabled (FORUM_ENABLED).[/bold red]")
        raise typer.Exit(1)

    with SessionLocal() as db:
        notice = create_post(db=db, post_type=NOTICE_POST_TYPE, title=title, content=content, status=status)
        host.hooks.do_action(HostEvent.SAVE_POST, db, notice.id, {NOTICE_TYPE_FIELD: notice_type})
        db.commit()
        notice_id = notice.id

    logger.info(f"Notice added from the CLI: {notice_id}")
    print(f"Notice added with ID: {notice_id} (status: {status.value})")
