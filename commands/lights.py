"""
Light inspection commands.

Lists all lights on the bridge or shows a single light by id.
"""

import click

from commands.setup import client_from_context, reports_errors
from models.utils import describe_light


@click.command(name='lights')
@click.option('--ids', is_flag=True, help='Show light ids')
@click.pass_obj
@reports_errors
def lights_command(options: dict, ids: bool):
    """List all lights with their on/off state and brightness.

    \b
    Examples:
      hue-clip lights
      hue-clip lights --ids
    """
    _, client = client_from_context(options)
    lights = client.get_lights()

    if not lights:
        click.echo("No lights found.")
        return

    click.echo()
    click.secho(f"=== Lights ({len(lights)}) ===", fg='cyan', bold=True)
    for light in sorted(lights, key=lambda l: l.name.lower()):
        line = describe_light(light)
        if ids:
            line = f"{line}  [{light.id}]"
        click.echo(f"  {line}")
    click.echo()


@click.command(name='light')
@click.argument('light_id')
@click.pass_obj
@reports_errors
def light_command(options: dict, light_id: str):
    """Show one light by id.

    \b
    Examples:
      hue-clip light 3f2a6e5c-0d8b-4c77-a2b8-6fb1c6f1a0d2
    """
    _, client = client_from_context(options)
    light = client.get_light(light_id)

    click.secho(describe_light(light), bold=True)
    click.echo(f"  id:        {light.id}")
    if light.metadata.archetype:
        click.echo(f"  archetype: {light.metadata.archetype}")
    if light.color_temperature is not None and light.color_temperature.mirek is not None:
        click.echo(f"  mirek:     {light.color_temperature.mirek}")
    if light.color is not None:
        click.echo(f"  xy:        {light.color.xy.x:.4f}, {light.color.xy.y:.4f}")
