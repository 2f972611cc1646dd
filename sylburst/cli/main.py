# sylburst/cli/main.py

"""
Main entry point for the sylburst CLI application.
Uses Click for command-line interface handling.
"""

import logging

import click

from sylburst.version import __version__
from .base_cmd import ConfigGroup, verbose_option, quiet_option
from .segment_cmd import segment_cmd

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS, cls=ConfigGroup)
@click.version_option(__version__, '-V', '--version', package_name='sylburst', prog_name='sylburst')
@verbose_option
@quiet_option
@click.pass_context
def main_cli(ctx, verbose: int, quiet: bool):
    """
    sylburst: find syllables and vocal bursts in audio recordings.

    Configuration is loaded from:
    Defaults -> ./sylburst.toml -> ~/.config/sylburst/sylburst.toml -> Env Vars (SYLBURST_*)

    Use -v for verbose output, -vv for debug output, -q for quiet mode.
    """
    if isinstance(ctx.obj, dict) and 'config' in ctx.obj:
        logger.debug("sylburst CLI group invoked. Config loaded.")
    else:
        logger.error("Configuration not found in context. Setup might have failed.")


main_cli.add_command(segment_cmd)

cli = main_cli

if __name__ == "__main__":
    cli()
