# stamper/cli.py

import logging
import click

from stamper import app
from stamper.config import Config
from stamper.models.stamp import InvalidInput
from stamper.models import variants as variants_model
from stamper.services import output_service, version_stamper
from stamper.version import version_string


def _resolve_instant(at):
    """Parses --at, or reads the clock exactly once for this invocation."""
    try:
        return version_stamper.to_instant(at) if at else version_stamper.capture_instant()
    except InvalidInput as e:
        raise click.BadParameter(str(e), param_hint="'--at'") from e


def _emit(content, output):
    if output:
        try:
            path = output_service.write_output(output, content)
        except OSError as e:
            raise click.ClickException(f"Cannot write {output}: {e}") from e
        click.echo(f"Wrote {path}", err=True)
    else:
        click.echo(content, nl=False)


@click.group()
@click.version_option(version_string(), prog_name='stamper')
def cli():
    """Date-based version code/name stamping for build variants."""


@cli.command()
@click.option('--variant', '-v', default=Config.DEFAULT_VARIANT, show_default=True,
              help="Build type (release/debug) or combined variant name such as playRelease.")
@click.option('--at', 'at', default=None, help="ISO-8601 instant with offset; defaults to now (UTC).")
@click.option('--format', '-f', 'fmt', type=click.Choice(output_service.OUTPUT_FORMATS),
              default=Config.OUTPUT_FORMAT, show_default=True)
@click.option('--output', '-o', default=None, type=click.Path(dir_okay=False),
              help="Write to this file instead of stdout.")
def stamp(variant, at, fmt, output):
    """Print the version code and name for one variant."""
    instant = _resolve_instant(at)
    try:
        _, build_type = variants_model.resolve_variant(variant)
        result = version_stamper.stamp(instant, build_type)
    except InvalidInput as e:
        raise click.BadParameter(str(e), param_hint="'--variant'") from e
    logging.info(f"[CLI] {variant}: versionCode={result.code} versionName='{result.name}'")
    _emit(output_service.render_stamp(result, fmt), output)


@cli.command(name='pass')
@click.option('--variant', '-v', 'variant_names', multiple=True,
              help="Variant to stamp (repeatable); defaults to every flavor x build type.")
@click.option('--at', 'at', default=None, help="ISO-8601 instant with offset; defaults to now (UTC).")
@click.option('--format', '-f', 'fmt', type=click.Choice(['json', 'properties']),
              default='json', show_default=True)
@click.option('--output', '-o', default=None, type=click.Path(dir_okay=False),
              help="Write to this file instead of stdout.")
def stamp_pass(variant_names, at, fmt, output):
    """Stamp every variant of one configuration pass from a single instant."""
    instant = _resolve_instant(at)
    try:
        stamps = version_stamper.stamp_pass(instant, variant_names or None)
    except InvalidInput as e:
        raise click.BadParameter(str(e), param_hint="'--variant'") from e
    _emit(output_service.render_pass(stamps, instant, fmt), output)


@cli.command()
@click.option('--host', default=Config.HOST, show_default=True)
@click.option('--port', default=Config.PORT, show_default=True, type=int)
def serve(host, port):
    """Run the HTTP API."""
    logging.info(f"[SYSTEM] Starting stamper API {version_string()} on {host}:{port}")
    app.run(host=host, port=port)


def main():
    cli()
