"""CLI: super-message messages create|update|delete"""

import json

import click
from rich.console import Console

console = Console()


def _get_client(access_token=None):
    from super_message.cli.main import _get_client
    return _get_client(access_token)


def _run(coro):
    from super_message.cli.main import _run
    return _run(coro)


def _parse_data(raw):
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--data")
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--data")
    return data


def _content_options(f):
    f = click.option("--data", default=None, help="Message data as a JSON object")(f)
    f = click.option("--title", required=True)(f)
    f = click.option("--template-version", "-v", required=True, type=int)(f)
    f = click.option("--template-id", "-t", required=True)(f)
    f = click.option("--access-token", default=None)(f)
    return f


@click.group()
def messages():
    """Channel message management."""


@messages.command("create")
@_content_options
@click.option("--recipient", "recipients", multiple=True, help="Open ID of a recipient; repeatable")
@click.option("--to-all", is_flag=True, help="Send to every channel member")
def messages_create(access_token, template_id, template_version, title, data, recipients, to_all):
    """Push a new message."""
    payload = _parse_data(data)

    async def _create():
        client = _get_client(access_token)
        try:
            with console.status("Sending message..."):
                message_id = await client.messages.create(
                    template_id, template_version, title, payload,
                    recipients=list(recipients), to_all=to_all,
                )
        finally:
            await client.close()
        console.print(f"[green]Message created: {message_id}[/green]")

    _run(_create())


@messages.command("update")
@click.argument("message_id", type=int)
@_content_options
def messages_update(message_id, access_token, template_id, template_version, title, data):
    """Replace an existing message's template, title and data."""
    payload = _parse_data(data)

    async def _update():
        client = _get_client(access_token)
        try:
            with console.status("Updating..."):
                await client.messages.update(message_id, template_id, template_version, title, payload)
        finally:
            await client.close()
        console.print(f"[green]Message {message_id} updated.[/green]")

    _run(_update())


@messages.command("delete")
@click.argument("message_id", type=int)
@click.option("--access-token", default=None)
def messages_delete(message_id, access_token):
    """Delete a message."""

    async def _delete():
        client = _get_client(access_token)
        try:
            with console.status("Deleting..."):
                await client.messages.delete(message_id)
        finally:
            await client.close()
        console.print(f"[green]Message {message_id} deleted.[/green]")

    _run(_delete())
