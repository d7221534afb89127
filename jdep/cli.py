"""
jdep CLI -- Class File Dependency Analyzer
===========================================

Click-based command-line interface.  Each FILE is a compiled class; for
each one jdep writes a make-style ``.d`` rule listing the source files
the class depends on.

Usage::

    # Rules for two classes, sources under src/, rules under build/deps/
    jdep -c build/classes -d build/deps -j src \\
        build/classes/com/acme/Widget.class build/classes/com/acme/Gadget.class

    # Keep java.*, javax.* and com.sun.* dependencies
    jdep -a Widget.class

    # Only record dependencies inside com.acme, ignoring com.acme.test
    jdep -i com.acme -e com.acme.test Widget.class

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
import sys
import tomllib

import click

from shared.config import JdepConfig
from shared.console import JdepConsole
from shared.logger import JdepLogger

from jdep import __version__
from jdep.core.engine import JdepEngine
from jdep.core.errors import JdepError
from jdep.output.console import JdepConsoleOutput


@click.command("jdep", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1, type=click.Path())
@click.option(
    "--all-packages", "-a",
    is_flag=True,
    default=False,
    help="Include java.*, javax.* and com.sun.* packages in dependencies.",
)
@click.option(
    "--exclude", "-e",
    "excluded",
    metavar="PACKAGE",
    multiple=True,
    help="Exclude PACKAGE from dependencies (repeatable).",
)
@click.option(
    "--include", "-i",
    "included",
    metavar="PACKAGE",
    multiple=True,
    help="Only include PACKAGE in dependencies (repeatable).",
)
@click.option(
    "--class-root", "-c",
    metavar="CPATH",
    default=None,
    help="Base directory for .class files.",
)
@click.option(
    "--dep-root", "-d",
    metavar="DPATH",
    default=None,
    help="Base directory for output .d files.",
)
@click.option(
    "--java-root", "-j",
    metavar="JPATH",
    default=None,
    help="Base directory for .java files in dependency lines.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file (default: ./jdep.toml if present).",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the run result as JSON to stdout.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging and list every rule's sources.",
)
@click.version_option(__version__, "--version", prog_name="jdep")
def jdep_cli(
    files: tuple[str, ...],
    all_packages: bool,
    excluded: tuple[str, ...],
    included: tuple[str, ...],
    class_root: str | None,
    dep_root: str | None,
    java_root: str | None,
    config_path: str | None,
    json_output: bool,
    verbose: bool,
) -> None:
    """jdep -- Java class file dependency analyzer.

    Writes one make-style dependency rule per FILE, associating the
    compiled class with the source files of every class it references,
    its own nested classes and its runtime-visible annotations.
    """
    console = JdepConsole(stderr=json_output)

    try:
        config = JdepConfig.load(config_path)
    except (FileNotFoundError, tomllib.TOMLDecodeError) as exc:
        console.error(f"Invalid configuration: {exc}")
        sys.exit(1)

    settings = config.jdep
    config = config.with_overrides(
        class_root=class_root,
        dep_root=dep_root,
        java_root=java_root,
        all_packages=True if all_packages else None,
        excluded_packages=[*settings.excluded_packages, *excluded],
        included_packages=[*settings.included_packages, *included],
    )

    globals_ = config.global_settings
    logger = JdepLogger(
        "engine",
        log_level="DEBUG" if verbose or globals_.debug else globals_.log_level,
        log_file=globals_.log_file,
        json_logs=globals_.log_json,
    )

    if not files:
        console.warning("No class files given.")
        return

    engine = JdepEngine(config=config, logger=logger)
    try:
        result = engine.run(files)
    except KeyboardInterrupt:
        console.warning("Analysis interrupted by user.")
        sys.exit(130)
    except JdepError as exc:
        console.error(str(exc))
        sys.exit(1)
    except OSError as exc:
        console.error(f"I/O failure: {exc}")
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    JdepConsoleOutput(console).display(result, verbose=verbose)


def main() -> None:
    """Entry point for the ``jdep`` console script."""
    jdep_cli()


if __name__ == "__main__":
    main()
