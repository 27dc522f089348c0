"""CLI entry point for openapi-har."""

import json
import logging
from pathlib import Path

import click
import yaml

from openapi_har.generator.snippets import get_endpoint_snippets, get_snippets
from openapi_har.generator.targets import UnknownTargetError
from openapi_har.parser.detect import UnsupportedDocumentError, detect_format, load_document
from openapi_har.parser.refs import ReferenceResolutionError
from openapi_har.translator.har import enumerate_endpoints, translate_one


def _parse_values(values: tuple[str, ...]) -> dict:
    """Turn `name=value` options into a dict; values are parsed as YAML."""
    parsed = {}
    for item in values:
        name, sep, raw = item.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected name=value, got {item!r}", param_hint="--value")
        parsed[name] = yaml.safe_load(raw) if raw else ""
    return parsed


def _load(doc_path: Path) -> dict:
    try:
        document = load_document(doc_path)
        detect_format(document)
        return document
    except (UnsupportedDocumentError, yaml.YAMLError) as e:
        raise click.ClickException(str(e)) from e


def _write(data, output: Path | None) -> None:
    text = json.dumps(data, indent=2)
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Saved to {output}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """openapi-har: translate OpenAPI / Swagger documents into HAR requests and code snippets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--path", "api_path", default=None, help="Only translate this path, e.g. /pets/{id}.")
@click.option("--method", default=None, help="HTTP method to translate (requires --path).")
@click.option("--value", "values", multiple=True, help="Parameter value as name=value, repeatable.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write JSON here instead of stdout.")
def har(doc_path: Path, api_path: str | None, method: str | None, values: tuple[str, ...], output: Path | None):
    """Translate an API document into HAR request objects."""
    document = _load(doc_path)
    try:
        if api_path:
            if not method:
                raise click.UsageError("--method is required together with --path")
            requests = translate_one(document, api_path, method, _parse_values(values))
            data = [r.to_har() for r in requests]
        else:
            data = [
                {
                    "method": endpoint.method,
                    "url": endpoint.url,
                    "description": endpoint.description,
                    "hars": [r.to_har() for r in endpoint.requests],
                }
                for endpoint in enumerate_endpoints(document)
            ]
    except KeyError as e:
        raise click.ClickException(f"No such operation: {e}") from e
    except ReferenceResolutionError as e:
        raise click.ClickException(str(e)) from e
    _write(data, output)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-t", "--target", "targets", multiple=True, required=True, help="Target such as shell_curl or python_requests, repeatable.")
@click.option("--path", "api_path", default=None, help="Only generate snippets for this path.")
@click.option("--method", default=None, help="HTTP method (requires --path).")
@click.option("--value", "values", multiple=True, help="Parameter value as name=value, repeatable.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write JSON here instead of stdout.")
def snippets(
    doc_path: Path,
    targets: tuple[str, ...],
    api_path: str | None,
    method: str | None,
    values: tuple[str, ...],
    output: Path | None,
):
    """Generate code snippets for the operations of an API document."""
    document = _load(doc_path)
    try:
        if api_path:
            if not method:
                raise click.UsageError("--method is required together with --path")
            result = get_endpoint_snippets(document, api_path, method, list(targets), _parse_values(values))
            data = result.model_dump()
        else:
            data = [r.model_dump() for r in get_snippets(document, list(targets))]
    except UnknownTargetError as e:
        raise click.ClickException(str(e)) from e
    except KeyError as e:
        raise click.ClickException(f"No such operation: {e}") from e
    except ReferenceResolutionError as e:
        raise click.ClickException(str(e)) from e
    _write(data, output)
