"""Serve command - run the HTTP API in the foreground."""

import cyclopts
import logfire
import uvicorn

from repertorium.cli.console import get_console
from repertorium.config import Config
from repertorium.infrastructure.persistence.migrate import run_migrations

app = cyclopts.App(name="serve", help="Run the register server")


@app.default
def serve(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Start the API server.

    Args:
        host: Host to bind to.
        port: Port to listen on.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]

    if config.database.auto_migrate:
        console.info("Running database migrations...")
        run_migrations(config.database.url)

    logfire.configure(service_name="repertorium", send_to_logfire="if-token-present")
    console.info(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "repertorium.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
    )
