# engagement_harness/cli/session_cli.py
import typer

from .utils_cli import make_api_request

app = typer.Typer(
    name="session",
    help="Inspect or re-create the SDK session.",
    no_args_is_help=True
)


@app.command("status")
def session_status():
    """Show the session state machine's current state."""
    make_api_request("GET", "/session")


@app.command("reinit")
def reinitialize_session():
    """Re-create the SDK session for the current form, even if nothing changed."""
    make_api_request("POST", "/session/reinitialize")


if __name__ == "__main__":
    app()
