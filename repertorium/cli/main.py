"""Main CLI application using Cyclopts.

``migrate`` and ``serve`` work on the configured database directly;
``stats`` is a thin HTTP client against a running server.
"""

import cyclopts

from repertorium.cli.commands import migrate, serve, stats

app = cyclopts.App(
    name="repertorium",
    help="Notarial deed register and name index",
)

app.command(migrate.app, name="migrate")
app.command(serve.app, name="serve")
app.command(stats.app, name="stats")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
