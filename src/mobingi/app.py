"""Typer application and CLI entry point for mobingi.

Two commands are provided:

* ``mobingi token`` -- run the credential exchange and print the access
  token on stdout, so it can be captured with ``$(mobingi token)``.
* ``mobingi endpoints`` -- print the API, registry and sesha3 endpoints
  resolved from the environment and flags, without any network call.

Credentials default to the ``MOBINGI_*`` environment variables; flags
override them the same way a :class:`~mobingi.models.Config` passed to
:func:`mobingi.session.new` does.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

import typer

from mobingi import __version__
from mobingi.exceptions import InvalidUsageError, MobingiError
from mobingi.models import Config, GrantType, HttpClientConfig

app = typer.Typer(
    name="mobingi",
    help="Authenticate against the Mobingi API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"mobingi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Install the output manager and route library logging to stderr."""
    from mobingi.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    output.configure_logging()
    set_output(output)


@app.command("token")
def token_command(
    client_id: str = typer.Option("", "--client-id", help="Client id (default $MOBINGI_CLIENT_ID)."),
    client_secret: str = typer.Option(
        "", "--client-secret", help="Client secret (default $MOBINGI_CLIENT_SECRET)."
    ),
    username: str = typer.Option("", "--username", help="Subuser name (default $MOBINGI_USERNAME)."),
    password: str = typer.Option(
        "", "--password", help="Subuser password (default $MOBINGI_PASSWORD)."
    ),
    grant_type: str = typer.Option(
        "", "--grant-type", help="client_credentials or password (inferred if omitted)."
    ),
    scope: str = typer.Option("", "--scope", help="Token scope (default openid)."),
    api_version: int = typer.Option(0, "--api-version", help="API version (-1 for none)."),
    base_api_url: str = typer.Option("", "--base-api-url", help="Override the API base URL."),
    use_form: bool = typer.Option(False, "--form", help="Send credentials as form data."),
    timeout: float = typer.Option(30.0, "--timeout", help="Request timeout in seconds."),
) -> None:
    """Exchange credentials for an access token and print it.

    Example::

        export MOBINGI_CLIENT_ID=... MOBINGI_CLIENT_SECRET=...
        mobingi token
    """
    from mobingi.output import debug, error, print_data, success
    from mobingi.session import new

    override = Config(
        client_id=client_id,
        client_secret=client_secret,
        username=username,
        password=password,
        grant_type=grant_type,
        scope=scope,
        api_version=api_version,
        base_api_url=base_api_url,
        use_form=use_form,
        http_client_config=HttpClientConfig(timeout=timeout),
    )

    try:
        if grant_type and grant_type not in {g.value for g in GrantType}:
            raise InvalidUsageError(
                f"--grant-type must be client_credentials or password, got '{grant_type}'"
            )
        sess = new(override)
    except MobingiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Token endpoint: {sess.api_endpoint()}/access_token")
    print_data(sess.access_token)
    success("Authenticated.")


@app.command("endpoints")
def endpoints_command(
    api_version: int = typer.Option(0, "--api-version", help="API version (-1 for none)."),
    base_api_url: str = typer.Option("", "--base-api-url", help="Override the API base URL."),
    base_registry_url: str = typer.Option(
        "", "--base-registry-url", help="Override the registry base URL."
    ),
    sesha3_url: str = typer.Option("", "--sesha3-url", help="Override the sesha3 URL."),
) -> None:
    """Show the endpoints a session would use."""
    from mobingi.config import resolve_config
    from mobingi.output import format_response
    from mobingi.session import Session

    config = resolve_config(
        Config(
            api_version=api_version,
            base_api_url=base_api_url,
            base_registry_url=base_registry_url,
            sesha3_url=sesha3_url,
        )
    )
    sess = Session(config)
    data: dict[str, Any] = {
        "api": sess.api_endpoint(),
        "registry": sess.registry_endpoint(),
        "sesha3": sess.sesha3_endpoint(),
    }
    format_response(data)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Optional[Any]) -> None:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``mobingi`` console script.

    :class:`~mobingi.exceptions.MobingiError` instances that escape a
    command exit with the error's ``exit_code``.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except MobingiError as exc:
        from mobingi.output import error

        error(str(exc))
        sys.exit(exc.exit_code)
