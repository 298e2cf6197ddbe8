"""Entry point for ``python -m pkgdoc``."""

from pkgdoc.cli.commands import cli

if __name__ == "__main__":
    cli()
