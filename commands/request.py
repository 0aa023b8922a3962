"""
Raw request command.

Performs an arbitrary GET against the bridge using the request builder and
prints the decoded data payload (or the raw body with --raw).
"""

import json

import click

from commands.setup import client_from_context, reports_errors


@click.command(name='get')
@click.option('-r', '--resource', 'resource_type', default='', help='Resource type, e.g. light or room')
@click.option('-i', '--id', 'resource_id', default='', help='Resource id')
@click.option('-p', '--path', 'raw_path', default='', help='Raw path, overrides --resource/--id')
@click.option('-q', '--query', default='', help='Raw query string')
@click.option('--api-version', default='v2', show_default=True, help='CLIP API version')
@click.option('--raw', is_flag=True, help='Print the response body unmodified')
@click.pass_obj
@reports_errors
def get_command(options: dict, resource_type: str, resource_id: str, raw_path: str,
                query: str, api_version: str, raw: bool):
    """Perform a GET request and print the result.

    \b
    Examples:
      hue-clip get -r room
      hue-clip get -r light -i <id>
      hue-clip get -p /clip/v2/resource --raw
    """
    _, client = client_from_context(options)

    request = (
        client.request()
        .verb('GET')
        .api_version(api_version)
        .resource(resource_type)
        .id(resource_id)
        .path(raw_path)
        .query(query)
    )

    if raw:
        click.echo(request.do_raw().decode('utf-8', errors='replace'))
        return

    response = request.do()
    for error in response.errors:
        click.secho(f"✗ {error.description}", fg='red', err=True)
    click.echo(json.dumps(response.into(), indent=2))
