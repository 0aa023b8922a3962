"""
Setup commands for the Hue CLIP CLI.

Contains the custom Click group class for coloured help output and typo
suggestions, the shared error reporting decorator, and the setup/configure
commands.
"""

import functools

import click
import requests

from core.config import load_settings, save_settings
from core.errors import HueError
from models.types import TYPE_BRIDGE
from models.utils import build_client, similarity_score


class ColouredGroup(click.Group):
    """Custom Group class that adds colour to help output and suggests similar commands."""

    def resolve_command(self, ctx, args):
        """Resolve command with suggestions for typos."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' in str(e):
                cmd_name = args[0] if args else ''
                suggestions = self._get_suggestions(ctx, cmd_name)

                if suggestions:
                    error_msg = f"Error: No such command '{cmd_name}'.\n\n"
                    error_msg += click.style("Did you mean one of these?\n", fg='yellow')
                    for suggestion in suggestions:
                        error_msg += click.style(f"  • {suggestion}\n", fg='green')
                    raise click.UsageError(error_msg)
            raise

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Get command suggestions based on similarity."""
        if not cmd_name:
            return []

        suggestions = []
        for command in self.list_commands(ctx):
            cmd_obj = self.get_command(ctx, command)
            if cmd_obj and not cmd_obj.hidden:
                score = similarity_score(cmd_name, command)
                if score > 0:
                    suggestions.append((score, command))

        suggestions.sort(reverse=True, key=lambda x: x[0])
        return [cmd for score, cmd in suggestions[:max_suggestions]]

    def format_usage(self, ctx, formatter):
        """Format the usage line with colour."""
        formatter.write_paragraph()
        formatter.write_text(
            click.style('Usage: ', fg='cyan', bold=True) +
            click.style(f'{ctx.command_path} [OPTIONS] COMMAND [ARGS]...', fg='white')
        )

    def format_commands(self, ctx, formatter):
        """Format commands with colour."""
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=500)))

        if commands:
            formatter.write_paragraph()
            formatter.write_text(click.style('Commands:', fg='yellow', bold=True))

            max_len = max(max(len(cmd[0]) for cmd in commands), 12)

            with formatter.indentation():
                for subcommand, help_text in commands:
                    formatter.write_text(
                        click.style(subcommand.ljust(max_len), fg='green') + '  ' +
                        click.style(help_text, fg='white', dim=True)
                    )


def reports_errors(func):
    """Report library and transport errors and exit with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HueError as e:
            click.secho(f"Error: {e}", fg='red', err=True)
        except requests.exceptions.RequestException as e:
            click.secho(f"Connection error: {e}", fg='red', err=True)
        raise SystemExit(1)
    return wrapper


def client_from_context(options: dict):
    """Resolve settings from the group options and build a client."""
    settings = load_settings(
        host=options.get('host'),
        api_key=options.get('key'),
        insecure=options.get('insecure'),
    )
    return settings, build_client(settings)


@click.command(name='setup')
@click.pass_obj
@reports_errors
def setup_command(options: dict):
    """Show bridge configuration and test the connection."""
    settings, client = client_from_context(options)

    click.echo()
    click.secho("=== Bridge Configuration ===", fg='cyan', bold=True)
    click.echo(f"  Host:     {client.base_url.geturl()}")
    click.echo(f"  Key:      {settings.api_key[:4]}…")
    click.echo(f"  Insecure: {'yes' if settings.insecure else 'no'}")
    click.echo(f"  Source:   {settings.source}")
    click.echo()

    response = client.request().resource(TYPE_BRIDGE).do()
    if response.errors:
        for error in response.errors:
            click.secho(f"✗ {error.description}", fg='red')
        raise SystemExit(1)

    click.secho(f"✓ Connected to Hue Bridge at {settings.host}", fg='green')


@click.command(name='configure')
@click.option('--host', 'bridge_host', required=True, help='Bridge IP address or URL')
@click.option('--key', 'api_key', required=True, help='Application key')
@reports_errors
def configure_command(bridge_host: str, api_key: str):
    """Save the bridge host and application key to the user config file."""
    path = save_settings(bridge_host, api_key)
    click.secho(f"✓ Configuration saved to {path}", fg='green')
