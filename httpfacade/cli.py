from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from ._body import Body
from ._client import Client
from ._exceptions import TransportError
from ._headers import Header, parse_header
from ._models import Response
from ._transports import Transport


def _status_color(status_code: int) -> str:
    """Return a rich color name based on HTTP status category."""
    if status_code < 200:
        return "cyan"
    elif status_code < 300:
        return "green"
    elif status_code < 400:
        return "yellow"
    elif status_code < 500:
        return "red"
    else:
        return "bold red"


def parse_pair(pair: str) -> tuple[str, str]:
    """Parse a ``key=value`` option."""
    if "=" not in pair:
        raise click.BadParameter(f"Invalid field format: '{pair}'. Expected 'key=value'.")
    key, _, value = pair.partition("=")
    return key.strip(), value


def format_payload(response: Response) -> str:
    if isinstance(response.data, str):
        return response.data
    return json.dumps(response.data, indent=4, ensure_ascii=False)


def format_response_plain(response: Response, timing: bool = False) -> str:
    lines = [f"{response.status_code} {response.url}".rstrip()]
    if timing:
        lines.append(f"Total: {response.elapsed * 1000:.1f}ms")
    lines.append("")
    lines.append(format_payload(response))
    return "\n".join(lines)


def print_response_rich(console: Console, response: Response, timing: bool = False) -> None:
    color = _status_color(response.status_code)
    status_line = Text()
    status_line.append(f"{response.status_code}", style=f"bold {color}")
    status_line.append(f" {response.url}", style="dim")
    console.print(status_line)
    if timing:
        console.print(f"[dim]⏱  Total: {response.elapsed * 1000:.1f}ms[/dim]")
    console.print()

    if isinstance(response.data, str):
        console.print(response.data)
    else:
        console.print(Syntax(format_payload(response), "json", theme="monokai"))


@click.command(help="Send one templated request and print the decoded response.")
@click.argument("url")
@click.option("-m", "--method", default="GET", help="HTTP method.")
@click.option("-b", "--base-url", default="", help="Prefix prepended to URL.")
@click.option(
    "-H",
    "--header",
    "headers",
    multiple=True,
    help='Add a header, e.g. -H "Accept: text/plain".',
)
@click.option(
    "-d",
    "--field",
    "fields",
    multiple=True,
    help="Add a body field, e.g. -d name=Ada. Encoded per Content-Type.",
)
@click.option(
    "-p",
    "--param",
    "params",
    multiple=True,
    help="Stage a URL parameter, e.g. -p id=7 for /users/{id}.",
)
@click.option("--timing", is_flag=True, default=False, help="Show total request time.")
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.pass_context
def main(
    ctx: click.Context,
    url: str,
    method: str,
    base_url: str,
    headers: tuple[str, ...],
    fields: tuple[str, ...],
    params: tuple[str, ...],
    timing: bool,
    no_color: bool,
) -> None:
    transport: Transport | None = (ctx.obj or {}).get("transport")
    use_rich = not no_color and sys.stdout.isatty()

    header: Header | None = None
    if headers:
        try:
            header = Header([parse_header(h) for h in headers])
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--header") from exc

    body: Body | None = None
    if fields:
        body = Body(dict(parse_pair(f) for f in fields))

    client = Client(base_url, transport=transport)
    try:
        response = client.request(
            method.upper(),
            url,
            header,
            body,
            params=dict(parse_pair(p) for p in params),
        )
    except TransportError as exc:
        if use_rich:
            console = Console(stderr=True)
            console.print(f"[bold red]{type(exc).__name__}[/bold red]: {exc}")
        else:
            click.echo(f"{type(exc).__name__}: {exc}", err=True)
        sys.exit(1)

    if use_rich:
        print_response_rich(Console(), response, timing=timing)
    else:
        click.echo(format_response_plain(response, timing=timing))

    if response.status_code >= 300:
        sys.exit(1)
