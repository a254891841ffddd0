import json
import os
import sys

import click

from image_probe import decode, detect_format
from image_probe.errors import ImageProbeError, UnsupportedFormat
from image_probe.image_utils import read_image_file
from image_probe.models import ProbeResult
from image_probe.report import DEFAULT_REPORT_PATH, write_html_report

JSON_ENV = "IMAGE_PROBE_JSON"


def output_result(result, json_output: bool):
    if json_output:
        if not isinstance(result, (dict, list)):
            result = {"result": result}
        click.echo(json.dumps(result, ensure_ascii=False))
    else:
        if isinstance(result, (dict, list)):
            click.echo(json.dumps(result, ensure_ascii=False, indent=2))
        else:
            click.echo(result)


def fail(e: Exception):
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def load_image(path):
    try:
        return decode(read_image_file(path))
    except (ImageProbeError, OSError) as e:
        fail(e)


@click.group()
@click.option("--json", "json_output", is_flag=True, help="Return output in JSON format")
@click.pass_context
def cli(ctx, json_output):
    """Image Probe CLI."""
    json_env = os.environ.get(JSON_ENV, "0").lower() in ("1", "true")
    ctx.obj = {"json": json_output or json_env}


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def detect(obj, path):
    """Detect the image format from its signature."""
    try:
        fmt = detect_format(read_image_file(path))
    except (ImageProbeError, OSError) as e:
        fail(e)
    if fmt is None:
        fail(UnsupportedFormat())
    output_result(fmt.value, obj["json"])


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def probe(obj, path):
    """Show image format and dimensions."""
    image = load_image(path)
    if obj["json"]:
        output_result(ProbeResult.from_image(image).model_dump(mode="json"), True)
    else:
        output_result(f"{image.format.value} {image.width}x{image.height}", False)


@cli.command(name="data-url")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def data_url(obj, path):
    """Print the image as a base64 data URL."""
    image = load_image(path)
    output_result(image.data_url, obj["json"])


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--out", "out_path", default=DEFAULT_REPORT_PATH, help="HTML report path")
@click.pass_obj
def report(obj, path, out_path):
    """Write an HTML report with format, dimensions and inline image."""
    image = load_image(path)
    written = write_html_report(image, out_path)
    output_result(str(written), obj["json"])


if __name__ == "__main__":
    cli()
