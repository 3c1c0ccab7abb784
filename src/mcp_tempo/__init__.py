import asyncio
import logging
import os

import click
from dotenv import load_dotenv

from mcp_tempo.utils.logging import setup_logging

__version__ = "0.1.0"

TRANSPORTS = ["stdio", "sse", "streamable-http"]

# CLI option -> environment variable read by TempoConfig and the server lifespan
OPTION_ENV_VARS = {
    "tempo_url": "TEMPO_BASE_URL",
    "tempo_personal_token": "TEMPO_PAT",
    "tempo_ssl_verify": "TEMPO_SSL_VERIFY",
    "tempo_timeout": "TEMPO_TIMEOUT",
    "read_only": "READ_ONLY_MODE",
    "enabled_tools": "ENABLED_TOOLS",
}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("true", "1", "yes")


def _logging_level(verbose: int) -> int:
    """-v means INFO, -vv DEBUG; without flags MCP_VERY_VERBOSE/MCP_VERBOSE decide."""
    if verbose >= 2 or (verbose == 0 and _env_flag("MCP_VERY_VERBOSE")):
        return logging.DEBUG
    if verbose == 1 or _env_flag("MCP_VERBOSE"):
        return logging.INFO
    return logging.WARNING


logger = setup_logging(logging.DEBUG if _env_flag("MCP_VERBOSE") else logging.WARNING)


def _option_provided(ctx: click.Context | None, name: str) -> bool:
    if ctx is None:
        return False
    return ctx.get_parameter_source(name) not in (
        click.core.ParameterSource.DEFAULT,
        click.core.ParameterSource.DEFAULT_MAP,
    )


def _env_value(value: object) -> str:
    return str(value).lower() if isinstance(value, bool) else str(value)


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(TRANSPORTS),
    default="stdio",
    help="Transport type (stdio, sse, or streamable-http)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for SSE or Streamable HTTP transport",
)
@click.option(
    "--host",
    default="0.0.0.0",  # noqa: S104
    help="Host to bind to for SSE or Streamable HTTP transport (default: 0.0.0.0)",
)
@click.option(
    "--path",
    default="/mcp",
    help="Path for Streamable HTTP transport (e.g., /mcp).",
)
@click.option(
    "--tempo-url",
    help="Base URL of the Jira instance running Tempo (e.g., https://jira.your-company.com)",
)
@click.option(
    "--tempo-personal-token",
    help="Personal Access Token used for Jira and Tempo requests",
)
@click.option(
    "--tempo-ssl-verify/--no-tempo-ssl-verify",
    default=True,
    help="Verify SSL certificates for the Jira/Tempo server (default: verify)",
)
@click.option(
    "--tempo-timeout",
    type=float,
    help="Timeout in seconds for each Jira/Tempo request (default: 30)",
)
@click.option(
    "--read-only",
    is_flag=True,
    help="Run in read-only mode (disables all write operations)",
)
@click.option(
    "--enabled-tools",
    help="Comma-separated list of tools to enable (enables all if not specified)",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    host: str,
    path: str | None,
    **tempo_options: object,
) -> None:
    """MCP Tempo Server - log and review Tempo Timesheets worklogs over MCP

    Targets Jira Server/Data Center with the Tempo Timesheets plugin,
    authenticated with a Personal Access Token. Command line options win
    over TRANSPORT, PORT, HOST and STREAMABLE_HTTP_PATH from the environment
    or the .env file.
    """
    logging_level = _logging_level(verbose)
    global logger
    logger = setup_logging(logging_level)
    logger.debug(f"Logging level set to: {logging.getLevelName(logging_level)}")

    if env_file:
        logger.debug(f"Loading environment from file: {env_file}")
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    click_ctx = click.get_current_context(silent=True)

    final_transport = os.getenv("TRANSPORT", "stdio").lower()
    if _option_provided(click_ctx, "transport"):
        final_transport = transport
    if final_transport not in TRANSPORTS:
        logger.warning(f"Invalid transport '{final_transport}', using 'stdio'.")
        final_transport = "stdio"

    final_port = 8000
    env_port = os.getenv("PORT")
    if env_port and env_port.isdigit():
        final_port = int(env_port)
    if _option_provided(click_ctx, "port"):
        final_port = port

    final_host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    if _option_provided(click_ctx, "host"):
        final_host = host

    final_path: str | None = os.getenv("STREAMABLE_HTTP_PATH", None)
    if _option_provided(click_ctx, "path"):
        final_path = path

    for option, env_var in OPTION_ENV_VARS.items():
        if _option_provided(click_ctx, option):
            os.environ[env_var] = _env_value(tempo_options[option])

    import fastmcp

    from mcp_tempo.servers import main_mcp

    run_kwargs: dict[str, object] = {"transport": final_transport}

    if final_transport == "stdio":
        logger.info("Starting server with STDIO transport.")
    else:
        run_kwargs["host"] = final_host
        run_kwargs["port"] = final_port
        run_kwargs["log_level"] = logging.getLevelName(logging_level).lower()
        if final_path is not None:
            run_kwargs["path"] = final_path

        display_path = final_path or (
            fastmcp.settings.sse_path
            if final_transport == "sse"
            else fastmcp.settings.streamable_http_path
        )
        logger.info(
            f"Starting server with {final_transport.upper()} transport on "
            f"http://{final_host}:{final_port}{display_path}"
        )

    asyncio.run(main_mcp.run_async(**run_kwargs))


__all__ = ["main", "__version__"]

if __name__ == "__main__":
    main()
