"""Command-line interface for the JSON Reshaper."""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config_loader import load_config_file
from .document import Json
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler
from .types import ReshapeError


EXTRACT_TYPES = ("any", "string", "int", "float", "bool", "list")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """JSON Reshaper - query, extract and rewrite JSON documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["error_handler"] = ErrorHandler()


def _read_document(path: Path) -> Json:
    try:
        return Json.parse(path.read_text(encoding='utf-8'))
    except ValueError as e:
        raise click.ClickException(f"{path}: {e}")


def _emit(doc: Json, pretty: bool, output: Optional[str]) -> None:
    text = doc.to_json(pretty=pretty)
    if output:
        Path(output).write_text(text + "\n", encoding='utf-8')
        click.echo(f"✅ Wrote {output}", err=True)
    else:
        click.echo(text)


def _fail(ctx: click.Context, error: ReshapeError) -> None:
    response = ctx.obj["error_handler"].handle_error(error)
    click.echo(f"❌ {error}", err=True)
    click.echo(f"   • {response.suggested_action}", err=True)
    ctx.exit(1)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('path')
@click.option('--pretty', '-p', is_flag=True, help='Indent the output')
@click.pass_context
def get(ctx: click.Context, input_file: Path, path: str, pretty: bool):
    """Print the value found at PATH in INPUT_FILE."""
    doc = _read_document(input_file)
    try:
        found = doc.at(path)
    except ReshapeError as e:
        _fail(ctx, e)
        return
    if not found.exists():
        click.echo(f"❌ Path '{path}' does not exist", err=True)
        ctx.exit(1)
    click.echo(found.to_json(pretty=pretty))


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('path')
@click.option('--type', '-t', 'value_type', type=click.Choice(EXTRACT_TYPES), default='any',
              help='Type to extract (default: any)')
@click.pass_context
def extract(ctx: click.Context, input_file: Path, path: str, value_type: str):
    """Extract a typed value at PATH; fails if missing or of the wrong type."""
    doc = _read_document(input_file)
    extractors = {
        "any": doc.extract,
        "string": doc.extract_string,
        "int": doc.extract_int,
        "float": doc.extract_float,
        "bool": doc.extract_bool,
        "list": doc.extract_list,
    }
    try:
        value = extractors[value_type](path)
    except ReshapeError as e:
        _fail(ctx, e)
        return
    click.echo(json.dumps(value, ensure_ascii=False))


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--rules', '-r', required=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='JSON rule document')
@click.option('--output', '-o', help='Output JSON file path')
@click.option('--pretty', '-p', is_flag=True, help='Indent the output')
@click.option('--profile', is_flag=True, help='Report duration and memory usage')
@click.pass_context
def transform(ctx: click.Context, input_file: Path, rules: Path, output: Optional[str],
              pretty: bool, profile: bool):
    """Build a new document from INPUT_FILE using a rule document."""
    doc = _read_document(input_file)
    try:
        config = load_config_file(rules)
        profiler = PerformanceProfiler()
        with profiler.profile_operation("transform", input_file.stat().st_size, len(config)):
            result = doc.transform(config)
            profiler.record_output(len(result.to_json().encode('utf-8')))
    except ReshapeError as e:
        _fail(ctx, e)
        return
    _emit(result, pretty, output)
    if profile:
        _report(profiler)


@main.command()
@click.argument('base_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('overrides_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--rules', '-r', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='JSON rule document mapping overrides onto the base shape')
@click.option('--output', '-o', help='Output JSON file path')
@click.option('--pretty', '-p', is_flag=True, help='Indent the output')
@click.option('--profile', is_flag=True, help='Report duration and memory usage')
@click.pass_context
def translate(ctx: click.Context, base_file: Path, overrides_file: Path, rules: Optional[Path],
              output: Optional[str], pretty: bool, profile: bool):
    """Merge OVERRIDES_FILE into BASE_FILE."""
    base = _read_document(base_file)
    overrides = _read_document(overrides_file)
    try:
        config = load_config_file(rules) if rules else None
        input_size = base_file.stat().st_size + overrides_file.stat().st_size
        profiler = PerformanceProfiler()
        with profiler.profile_operation("translate", input_size, len(config) if config else 0):
            result = base.translate(overrides, config)
            profiler.record_output(len(result.to_json().encode('utf-8')))
    except ReshapeError as e:
        _fail(ctx, e)
        return
    _emit(result, pretty, output)
    if profile:
        _report(profiler)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('fields', nargs=-1, required=True)
@click.option('--pretty', '-p', is_flag=True, help='Indent the output')
@click.pass_context
def only(ctx: click.Context, input_file: Path, fields, pretty: bool):
    """Keep only the named top-level FIELDS of INPUT_FILE."""
    doc = _read_document(input_file)
    try:
        result = doc.only(fields)
    except ReshapeError as e:
        _fail(ctx, e)
        return
    click.echo(result.to_json(pretty=pretty))


@main.command('validate-rules')
@click.argument('rules', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate_rules(ctx: click.Context, rules: Path):
    """Check a rule document and report every broken rule."""
    try:
        raw = json.loads(rules.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{rules}: invalid JSON: {e.msg} at line {e.lineno}")

    result = ctx.obj["error_handler"].validate_config(raw)
    for warning in result.warnings:
        click.echo(f"⚠️  {warning}", err=True)
    if result.is_valid:
        click.echo(f"✅ {rules} is valid")
        return
    click.echo(f"❌ {rules} has {len(result.errors)} problem(s):", err=True)
    for error in result.errors:
        click.echo(f"   • {error.location}: {error.message}", err=True)
    ctx.exit(1)


def _report(profiler: PerformanceProfiler) -> None:
    for metrics in profiler.metrics_history:
        click.echo(
            f"📊 {metrics.operation_name}: {metrics.duration * 1000:.2f}ms, "
            f"{metrics.rules_applied} rules, peak memory {metrics.memory_peak_mb:.1f} MB",
            err=True,
        )


if __name__ == '__main__':
    main()
