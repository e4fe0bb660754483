"""CLI entry point for sgclient.

Commands:
  spec    — encode specs into route variables and decode API paths
  repo    — fetch repositories, commits, branches and badges
  review  — list code review tasks
  pull    — fetch pull requests
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from sgclient_cli.commands.pull import pull_cmd
from sgclient_cli.commands.repo import repo_cmd
from sgclient_cli.commands.review import review_cmd
from sgclient_cli.commands.spec import spec_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("sgclient"),
    prog_name="sgclient",
)
@click.option(
    "--config",
    "config_path",
    default=".sgclient.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="SGCLIENT_CONFIG",
)
@click.option("--base-url", default=None, help="API base URL. Overrides config file.")
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP requests.")
@click.pass_context
def main(ctx: click.Context, config_path: str, base_url: str | None, verbose: bool):
    """Command-line client for the code intelligence API."""
    from sgclient_cli.auth import resolve_access_token
    from sgclient_core.config import build_client, load_config

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)

    config = load_config(config_path, cli_overrides={"base_url": base_url})

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_access_token()
    if token:
        config["access_token"] = token

    client = build_client(config)
    ctx.obj["config"] = config
    ctx.obj["client"] = client
    ctx.call_on_close(client.close)


main.add_command(spec_cmd)
main.add_command(repo_cmd)
main.add_command(review_cmd)
main.add_command(pull_cmd)
