"""Command-line interface for gql-schemaflow."""

import logging
import shutil
import sys
import tarfile
import tempfile
import zipfile
from collections import Counter
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, NoReturn

import click

from .core.build import build_schema
from .core.config import PipelineConfig, load_config
from .core.errors import PipelineConfigError, PipelineError
from .core.pipeline import format_diagnostic
from .core.printer import print_document

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")
PAGE_ARG_NAMES = ("first", "after", "last", "before")


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            # extraction filters exist from Python 3.10.12 and 3.11.4
            if hasattr(tarfile, "data_filter"):
                tar_ref.extractall(temp_dir, filter="data")
            else:
                tar_ref.extractall(temp_dir)
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


@contextmanager
def schema_source(schema_path: Path, verbose: bool = False) -> Iterator[Path]:
    """Yield a directory or file to load, extracting archives first."""
    temp_dir = None
    try:
        if schema_path.is_file() and schema_path.name.lower().endswith(ARCHIVE_SUFFIXES):
            click.echo(f"Extracting archive {schema_path.name}...", err=True)
            temp_dir = extract_archive(schema_path)
            if verbose:
                click.echo(f"  Extracted to: {temp_dir}", err=True)
            yield Path(temp_dir)
        else:
            yield schema_path
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


def configure_logging(verbose: bool) -> None:
    """Send log records and pipeline warnings to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if verbose:
        logging.getLogger("gql_schemaflow").setLevel(logging.DEBUG)
    logging.captureWarnings(True)


def fail(stage: str, message: str) -> NoReturn:
    """Print a diagnostic box and exit with a non-zero status."""
    click.secho(format_diagnostic(stage, message), fg="red", err=True)
    sys.exit(1)


def load_pipeline_config(
    config_path: str | None,
    schema: str | None,
    output: str | None,
    no_normalize: bool,
    page_args: tuple[str, ...],
    total_count: bool,
    page_info_type: str | None,
) -> PipelineConfig:
    """Build the configuration: file values first, then command-line overrides."""
    config = load_config(config_path) if config_path else PipelineConfig()

    if schema:
        config.schema_path = schema
    if output:
        config.output = output
    if no_normalize:
        config.normalize = False
    if page_args:
        for name in PAGE_ARG_NAMES:
            setattr(config.connections.page_args, name, name in page_args)
    if total_count:
        config.connections.add_total_count = True
    if page_info_type:
        config.connections.page_info.type_name = page_info_type

    if not config.schema_path:
        raise PipelineConfigError("A schema path is required (--schema or \"schema\" in the config file).")
    return config


def print_summary(document) -> None:
    """Print the number of definitions per kind."""
    counts = Counter(definition.kind for definition in document.definitions)
    for kind, count in sorted(counts.items()):
        click.echo(f"  {kind}: {count}", err=True)


@click.group()
@click.version_option(package_name="gql-schemaflow")
def main():
    """GraphQL schema build pipeline.

    Normalize SDL split across files, flatten extensions, complete interface
    fields and expand @connection directives into Relay connection types.
    """
    pass


def pipeline_options(func):
    """Options shared by every command that runs the pipeline."""
    options = [
        click.option(
            "--schema",
            "-s",
            type=click.Path(exists=True),
            help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
        ),
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            help="JSON configuration file.",
        ),
        click.option(
            "--no-normalize",
            is_flag=True,
            help="Skip base declaration, extension flattening and interface field passes.",
        ),
        click.option(
            "--page-arg",
            "page_args",
            multiple=True,
            type=click.Choice(PAGE_ARG_NAMES),
            help="Pagination argument to add to @connection fields (repeatable).",
        ),
        click.option(
            "--total-count",
            is_flag=True,
            help="Add a totalCount field to generated connection types.",
        ),
        click.option(
            "--page-info-type",
            help="Name of the page info type (default: PageInfo).",
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Enable verbose output.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@main.command()
@pipeline_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output .graphqls file. Prints to stdout when omitted.",
)
def build(schema, config_path, no_normalize, page_args, total_count, page_info_type, verbose, output):
    """Run the schema pipeline and write the normalized SDL.

    Examples:

        gql-schemaflow build --schema ./schema --output ./build/schema.graphqls

        gql-schemaflow build -s ./schema.tgz --page-arg first --page-arg after --page-arg last

        gql-schemaflow build -c ./schemaflow.json
    """
    configure_logging(verbose)
    try:
        config = load_pipeline_config(
            config_path, schema, output, no_normalize, page_args, total_count, page_info_type
        )
    except PipelineConfigError as e:
        fail("Configuration", str(e))

    with schema_source(Path(config.schema_path).resolve(), verbose) as source:
        if verbose:
            click.echo(f"Schema: {source}", err=True)
            click.echo(f"Output: {config.output or '<stdout>'}", err=True)

        config.schema_path = str(source)
        try:
            document = build_schema(config)
        except PipelineError as e:
            fail(e.stage, str(e.error))

    if verbose:
        print_summary(document)

    if config.output:
        click.echo(f"Done! Wrote schema to {config.output}", err=True)
    else:
        click.echo(print_document(document))


@main.command()
@pipeline_options
def check(schema, config_path, no_normalize, page_args, total_count, page_info_type, verbose):
    """Run the schema pipeline without writing anything.

    Examples:

        gql-schemaflow check --schema ./schema
    """
    configure_logging(verbose)
    try:
        config = load_pipeline_config(
            config_path, schema, None, no_normalize, page_args, total_count, page_info_type
        )
    except PipelineConfigError as e:
        fail("Configuration", str(e))

    # never write during a check, even if the config file names an output
    config.output = None

    with schema_source(Path(config.schema_path).resolve(), verbose) as source:
        config.schema_path = str(source)
        try:
            document = build_schema(config)
        except PipelineError as e:
            fail(e.stage, str(e.error))

    click.echo("Schema OK.")
    print_summary(document)


if __name__ == "__main__":
    main()
