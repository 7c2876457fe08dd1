import json
import logging
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line, summarize
from .errors import JsonSchemaToUmlError
from .pipeline import AnalyzerConfig, JsonSchemaToUml, OutputMode, PlantUmlExporter


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Model name (defaults to the input file or folder name)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every analysis step")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def json_schema_to_uml(name, config, force, verbose, path, output):
    """Convert the JSON Schema file or folder PATH into a PlantUML class diagram OUTPUT."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            config = AnalyzerConfig.from_dict(json.load(f))
    else:
        config = AnalyzerConfig()

    # CLI values override the config file
    if name is not None:
        config.model_name = name
    elif config.model_name == AnalyzerConfig().model_name:
        config.model_name = Path(path).stem
    if force:
        config.output.mode = OutputMode.FORCE

    try:
        result = JsonSchemaToUml(config).launch(path)
        exporter = PlantUmlExporter(config)
        exporter.write(result, Path(output), reconstruct_command_line(json_schema_to_uml))
    except JsonSchemaToUmlError as e:
        raise click.ClickException(str(e)) from e

    for line in summarize(result):
        click.echo(line, err=True)
