# engagement_harness/cli/form_cli.py
import typer
from typing import Optional
from typing_extensions import Annotated

from .utils_cli import make_api_request
from ..forms.models import AuthMethod

app = typer.Typer(
    name="form",
    help="Inspect and edit the harness form.",
    no_args_is_help=True
)


@app.command("show")
def show_form():
    """Show the published (validated) and draft form state."""
    make_api_request("GET", "/form")


@app.command("set")
def set_form_fields(
    app_id: Annotated[Optional[str], typer.Option("--app-id", help="Application identifier.")] = None,
    user_id: Annotated[Optional[str], typer.Option("--user-id", help="User identifier (NONE auth).")] = None,
    auth_method: Annotated[Optional[AuthMethod], typer.Option("--auth-method", help="Authentication method.")] = None,
    event_name: Annotated[Optional[str], typer.Option("--event-name", help="Custom event name.")] = None,
    payload: Annotated[Optional[str], typer.Option("--payload", help="Event payload as JSON text.")] = None,
    email: Annotated[Optional[str], typer.Option("--email", help="Email for EMAIL auth.")] = None,
    password: Annotated[Optional[str], typer.Option("--password", help="Password for EMAIL auth.")] = None,
    access_token: Annotated[Optional[str], typer.Option("--access-token", help="Token for OAuth / Firebase auth.")] = None,
    external_user_id: Annotated[Optional[str], typer.Option("--external-user-id", help="Trusted 3rd party user id.")] = None,
    external_token: Annotated[Optional[str], typer.Option("--external-token", help="Trusted 3rd party token.")] = None,
):
    """Edit one or more form fields. Each field is validated after its debounce window."""
    payload_json = {
        "app_id": app_id,
        "user_id": user_id,
        "auth_method": auth_method.value if auth_method else None,
        "event_name": event_name,
        "event_payload_raw": payload,
        "email": email,
        "password": password,
        "access_token": access_token,
        "external_user_id": external_user_id,
        "external_token": external_token,
    }
    payload_json = {k: v for k, v in payload_json.items() if v is not None}

    if not payload_json:
        typer.echo("No fields provided. Nothing to do.")
        raise typer.Exit()

    make_api_request("PATCH", "/form", json_payload=payload_json, expected_status=202)


if __name__ == "__main__":
    app()
