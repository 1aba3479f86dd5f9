# engagement_harness/cli/utils_cli.py
import requests
import typer
import json
from typing import Optional, Dict, Any, Union, List


def make_api_request(
    method: str,
    endpoint: str,
    json_payload: Optional[Dict[str, Any]] = None,
    params_payload: Optional[Dict[str, Any]] = None,
    expected_status: Union[int, List[int]] = 200,
    expect_json_response: bool = True,
    echo_response: bool = True,
) -> Any:
    """
    Call the harness HTTP surface and report the outcome on the console.

    Exits with code 1 on connection errors and unexpected status codes so the
    CLI can be used in scripts.
    """
    from .config import HARNESS_API_BASE_URL

    full_url = f"{HARNESS_API_BASE_URL}{endpoint}"

    typer.echo(f"CLI: {method.upper()} {full_url}")
    if json_payload:
        typer.echo(f"CLI: JSON Payload: {json.dumps(_mask_secrets(json_payload), indent=2)}")
    if params_payload:
        typer.echo(f"CLI: Query Params: {params_payload}")

    try:
        response = requests.request(
            method,
            full_url,
            json=json_payload,
            params=params_payload,
            timeout=30
        )
    except requests.exceptions.ConnectionError as e:
        typer.secho(
            f"CLI: Connection Error - Could not connect to harness at {full_url}. Is it running? Error: {e}",
            fg=typer.colors.RED
        )
        raise typer.Exit(code=1)
    except requests.exceptions.RequestException as e:
        typer.secho(f"CLI: Request Error - {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"CLI: Response Status: {response.status_code}")
    expected_statuses = [expected_status] if isinstance(expected_status, int) else expected_status

    if response.status_code not in expected_statuses:
        err_msg = f"CLI: API Error - Expected status {expected_status}, got {response.status_code}."
        try:
            err_data = response.json()
            err_msg += f" Detail: {err_data.get('detail', response.text)}"
        except json.JSONDecodeError:
            err_msg += f" Raw response: {response.text}"
        typer.secho(err_msg, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if not expect_json_response:
        if echo_response:
            typer.echo(response.text)
        return response.text

    try:
        data = response.json()
    except json.JSONDecodeError:
        typer.secho(
            f"CLI: Error - Could not decode JSON response. Raw text: {response.text}",
            fg=typer.colors.RED
        )
        raise typer.Exit(code=1)
    if echo_response:
        typer.echo(typer.style("CLI: Response JSON:", fg=typer.colors.CYAN))
        typer.echo(json.dumps(data, indent=2))
    return data


SECRET_FIELDS = ("password", "access_token", "external_token")


def _mask_secrets(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ("*******" if k in SECRET_FIELDS and v else v) for k, v in payload.items()}
