"""
Typer-based command line entry point: c(reate), e(xtract) and u(pdate).
"""

import logging
import os
from typing import Optional

import typer

from targzip.core.types import ArchiveConfig
from targzip.exceptions import ArchiveError, NoMatchingEntryError, PreconditionError
from targzip.operations.create import create_targz
from targzip.operations.extract import extract_targz
from targzip.operations.update import update_targz

logger = logging.getLogger(__name__)

USAGE = """
Name
    targzip

Synopsis
    targzip [c file.tar.gz directory] [e file.tar.gz directory] [u file.tar.gz file]

Description
    c create a tar.gz file
    e extract a tar.gz file
    u update a file
"""

OPTIONS = ("c", "e", "u")

app = typer.Typer(add_completion=False, help="Create, extract and update tar.gz archives")


@app.command()
def run(
    option: Optional[str] = typer.Argument(None, help="c, e or u"),
    archive: Optional[str] = typer.Argument(None, help="Path of the .tar.gz archive"),
    target: Optional[str] = typer.Argument(
        None, help="Directory for c and e, replacement file for u"
    ),
):
    """
    Create, extract or update a tar.gz archive.
    """
    if option is None:
        typer.echo(USAGE)
        return

    if option not in OPTIONS:
        typer.echo("Invalid options")
        typer.echo("Done.")
        raise typer.Exit(code=1)

    if archive is None or target is None:
        typer.echo(USAGE)
        typer.echo("Done.")
        raise typer.Exit(code=1)

    config = ArchiveConfig.from_env()
    exit_code = 0

    try:
        if option == "c":
            create_targz(archive, target, on_entry=typer.echo, config=config)
        elif option == "e":
            extract_targz(archive, target, config=config)
        else:
            update_targz(archive, target, translate=True, config=config)
    except NoMatchingEntryError as e:
        typer.echo(f"Error: {e}")
        exit_code = 1
    except PreconditionError as e:
        logger.debug("Precondition failed: %s", e)
        typer.echo("Please input valid file")
        exit_code = 1
    except (ArchiveError, OSError) as e:
        typer.echo(f"Error: {e}")
        exit_code = 1

    typer.echo("Done.")
    if exit_code:
        raise typer.Exit(code=exit_code)


def main():
    logging.basicConfig(
        level=os.getenv("TARGZIP_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s - %(message)s",
    )
    app()


if __name__ == "__main__":
    main()
