# engagement_harness/cli/main_cli.py
import typer
from typing import Optional
from typing_extensions import Annotated

from . import form_cli
from . import session_cli
from .utils_cli import make_api_request
from ..activity_log import LogEntry, render_entry

app = typer.Typer(
    name="harness",
    help="Engagement Harness Command Line Interface.",
    no_args_is_help=True
)

app.add_typer(form_cli.app, name="form")
app.add_typer(session_cli.app, name="session")


@app.callback()
def main_callback():
    """
    Engagement Harness CLI.
    Talks to a running harness; start one with 'harness serve'.
    """
    pass


@app.command("send")
def send_event():
    """Fire the event described by the current form."""
    make_api_request("POST", "/events/send", expected_status=202)


@app.command("logs")
def show_logs(
    limit: Annotated[Optional[int], typer.Option("--limit", min=1, help="Show only the newest N entries.")] = None,
):
    """Print the activity log, newest entry first."""
    params = {"limit": limit} if limit else None
    data = make_api_request("GET", "/logs", params_payload=params, echo_response=False)
    if not data:
        typer.echo("Activity log is empty.")
        return
    for raw_entry in data:
        typer.echo(render_entry(LogEntry.model_validate(raw_entry)))
        typer.echo("-" * 40)


@app.command("preview")
def show_preview():
    """Print the latest engagement template."""
    data = make_api_request("GET", "/engagement", echo_response=False)
    template = data.get("template") if data else ""
    if not template:
        typer.echo("No engagement received for the current event.")
        return
    typer.echo(template)


@app.command("serve")
def serve(
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 8000,
    reload: Annotated[bool, typer.Option(help="Reload on code changes.")] = False,
):
    """Run the harness HTTP surface with uvicorn."""
    import uvicorn

    uvicorn.run("engagement_harness.main:app", host=host, port=port, reload=reload)


def cli_entry_point():
    """Entry point function for console script registration in pyproject.toml"""
    app()


if __name__ == "__main__":
    cli_entry_point()
