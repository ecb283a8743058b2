"""CLI: super-message verify|decode"""

import json

import click
from rich.console import Console
from rich.table import Table

from super_message.errors import ValidationError
from super_message.query import decode_query

console = Console()


def _get_client(access_token=None):
    from super_message.cli.main import _get_client
    return _get_client(access_token)


def _run(coro):
    from super_message.cli.main import _run
    return _run(coro)


@click.command("verify")
@click.argument("request_token")
@click.option("--access-token", default=None, help="Overrides SM_ACCESS_TOKEN and the saved token")
@click.option("--timeout", default=None, type=float, help="Seconds to wait for the platform")
@click.option("--json-output", "--json", is_flag=True)
def verify_cmd(request_token, access_token, timeout, json_output):
    """Resolve the member behind a request token."""

    async def _verify():
        client = _get_client(access_token)
        try:
            with console.status("Verifying..."):
                member = await client.verify_request_token(request_token, timeout=timeout)
        finally:
            await client.close()
        if json_output:
            click.echo(member.model_dump_json(by_alias=True, indent=2))
            return
        console.print(f"[green]Member {member.open_id}[/green]"
                      f"{' (channel creator)' if member.channel_creator else ''}, expires at {member.expired_at}")

    _run(_verify())


@click.command("decode")
@click.argument("query")
@click.option("--message-request", is_flag=True, help="Also check the fields a card request must carry")
@click.option("--json-output", "--json", is_flag=True)
def decode_cmd(query, message_request, json_output):
    """Decode card request query parameters (a query string or full URL)."""
    try:
        ctx = decode_query(query)
        if message_request:
            ctx.check_for_message_request()
    except ValidationError as e:
        console.print(f"[red]{e} ({e.field})[/red]")
        raise SystemExit(1)
    if json_output:
        click.echo(json.dumps(ctx.model_dump(), indent=2))
        return
    table = Table(title="Request context")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for name, value in ctx.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)
