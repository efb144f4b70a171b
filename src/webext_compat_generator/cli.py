"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from webext_compat_generator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_default_configuration,
)
from webext_compat_generator.generation_run import (
    GenerationError,
    GenerationRequest,
    execute_compat_generation,
    execute_dataset_export,
)

# Bits of --verbosity and the loggers they switch to debug level.
_VERBOSITY_LOGGERS: dict[int, tuple[str, ...]] = {
    1: ("webext_compat_generator.schema_loading.import_resolution",),
    2: ("webext_compat_generator.entry_collection.reference_resolution",),
    4: (
        "webext_compat_generator.compat_tree.tree_updater",
        "webext_compat_generator.compat_tree.notation_detection",
    ),
}


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="webext-compat-generator")
def cli() -> None:
    """Generate WebExtension compat data for an application built on Firefox."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration to write",
)
def generate_config(output_path: str) -> None:
    """Write the default generator configuration with guidance comments."""
    try:
        resolved_output = write_default_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--source",
    "source_path",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=str),
    help="Path to a source checkout with a matching /comm directory",
)
@click.option(
    "--baseline",
    "baseline_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    help="Path to the upstream compat dataset (full dataset or its webextensions section)",
)
@click.option(
    "--output-dir",
    "output_dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=str),
    help="Directory for the generated compat data files",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML generator configuration (defaults are built in)",
)
@click.option(
    "--override",
    "override_path",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    help="JSON file with compat data to enforce. Applied entries are printed.",
)
@click.option(
    "--mailextensions/--no-mailextensions",
    "include_mail_extensions",
    default=True,
    show_default=True,
    help="Add the application's own (mail-only) APIs.",
)
@click.option(
    "--minimize/--no-minimize",
    default=True,
    show_default=True,
    help="Drop entries whose compat data equals their parent's.",
)
@click.option(
    "--verbosity",
    default=0,
    show_default=True,
    type=click.IntRange(min=0),
    help=(
        "Sum of debug traces to log: 1 namespace definitions after $import, "
        "2 all collected schema entries, 4 compat tree updates."
    ),
)
def generate(
    source_path: str,
    baseline_path: str,
    output_dir: str,
    config_path: str | None,
    override_path: str | None,
    include_mail_extensions: bool,
    minimize: bool,
    verbosity: int,
) -> None:
    """Merge baseline compat data with the local API schemas."""
    _configure_logging(verbosity)
    try:
        outcome = execute_compat_generation(
            GenerationRequest(
                source_path=source_path,
                baseline_path=baseline_path,
                output_dir=output_dir,
                config_path=config_path,
                override_path=override_path,
                include_mail_extensions=include_mail_extensions,
                minimize=minimize,
            )
        )
    except GenerationError as exc:
        raise CliError(str(exc)) from exc
    if outcome.applied_overrides:
        click.echo(json.dumps({"webextensions": outcome.applied_overrides}, indent=2))
    click.echo(str(outcome.aggregate_path))


@cli.command(name="export-dataset")
@click.option(
    "--baseline",
    "baseline_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    help="Path to the full upstream compat dataset",
)
@click.option(
    "--generated",
    "generated_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    help="Path to a generated aggregate compat data file",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=str),
    help="Path to the dataset file to write",
)
def export_dataset(baseline_path: str, generated_path: str, output_path: str) -> None:
    """Write the full dataset with its webextensions section replaced."""
    try:
        resolved_output = execute_dataset_export(baseline_path, generated_path, output_path)
    except GenerationError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def _configure_logging(verbosity: int) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", stream=sys.stderr)
    for bit, logger_names in _VERBOSITY_LOGGERS.items():
        if verbosity & bit:
            for logger_name in logger_names:
                logging.getLogger(logger_name).setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
