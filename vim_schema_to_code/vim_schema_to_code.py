import logging
import sys
from pathlib import Path

import click

from .pipeline import CodeGeneratorConfig, CodegenError, PipelineGenerator
from .pipeline.namespaces import DEFAULT_NAMESPACES, namespace_names

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--package", "-p", default=None, type=str, help="Package name the output tree is imported as")
@click.option("--fail-fast", is_flag=True, default=False, help="Skip namespaces not yet written once one fails")
@click.option(
    "--dry-run",
    default=None,
    type=click.Choice(namespace_names(DEFAULT_NAMESPACES)),
    help="Print the unformatted source of one namespace instead of writing files",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", default=None, required=False, type=click.Path(file_okay=False, resolve_path=True))
def vim_schema_to_code(config, package, fail_fast, dry_run, verbose, path, output):
    """Generate the mo, do, enum and fault packages from a schema file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if config is not None:
            config = CodeGeneratorConfig.from_file(config)
        else:
            config = CodeGeneratorConfig()

        # CLI flags override the config file
        if package:
            config.package_name = package
        if fail_fast:
            config.fail_fast = True

        if output is None:
            output = Path.cwd() / config.package_name

        codegen = PipelineGenerator.from_file(path, config)
        if dry_run:
            click.echo(codegen.render(dry_run))
            return
        written = codegen.generate(output)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    logger.info("Generated %d namespaces in %s", len(written), output)
