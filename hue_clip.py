#!/usr/bin/env python3
"""
Hue CLIP CLI
Query a Philips Hue bridge through the CLIP v2 API.
"""

import click

from commands.setup import ColouredGroup, setup_command, configure_command
from commands.lights import lights_command, light_command
from commands.request import get_command


@click.group(
    cls=ColouredGroup,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 999
    }
)
@click.version_option(version='0.1.0', prog_name='Hue CLIP')
@click.option('--host', default=None, help='Bridge IP address or URL')
@click.option('--key', default=None, help='Application key (hue-application-key)')
@click.option('--insecure/--secure', default=None,
              help='Skip TLS certificate verification (default: on, bridges use self-signed certificates)')
@click.pass_context
def cli(ctx, host, key, insecure):
    """Hue CLIP CLI - Query your Philips Hue bridge.

Configuration: --host/--key → HUE_BRIDGE_HOST/HUE_APPLICATION_KEY → ~/.hue_clip/config.json
Run 'configure' to save a bridge host and key, 'setup' to test them.

Use 'COMMAND -h' or 'COMMAND --help' for detailed help on a specific command."""
    ctx.obj = {'host': host, 'key': key, 'insecure': insecure}


cli.add_command(setup_command)
cli.add_command(configure_command)
cli.add_command(lights_command)
cli.add_command(light_command)
cli.add_command(get_command)


if __name__ == '__main__':
    cli()
