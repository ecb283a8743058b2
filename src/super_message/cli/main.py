"""
Super Message CLI — `super-message` command.

Commands:
  super-message auth <cmd>              Store or clear the channel access token
  super-message verify <request-token>  Resolve the member behind a request token
  super-message decode <query-or-url>   Decode card request query parameters
  super-message messages <cmd>          Push, update or delete messages
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install super-message-sdk[cli]")

from super_message.client import AsyncSuperMessage
from super_message.errors import SuperMessageError

console = Console()
CONFIG_FILE = Path.home() / ".super-message" / "config.json"
ACCESS_TOKEN_ENV = "SM_ACCESS_TOKEN"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client(access_token: Optional[str] = None) -> AsyncSuperMessage:
    cfg = _load_config()
    token = access_token or os.environ.get(ACCESS_TOKEN_ENV) or cfg.get("access_token")
    if not token:
        console.print("[red]No access token. Run `super-message auth set-token` first.[/red]")
        raise SystemExit(1)
    return AsyncSuperMessage(token, base_url=cfg.get("base_url"))


def _run(coro):
    try:
        return asyncio.run(coro)
    except SuperMessageError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
def main():
    """Super Message CLI — verify request tokens and manage channel messages."""


# Register subcommands from separate modules
from super_message.cli.auth import auth
from super_message.cli.verify import verify_cmd, decode_cmd
from super_message.cli.messages import messages

main.add_command(auth)
main.add_command(verify_cmd)
main.add_command(decode_cmd)
main.add_command(messages)


if __name__ == "__main__":
    main()
