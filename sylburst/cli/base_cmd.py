# sylburst/cli/base_cmd.py

"""
Shared CLI plumbing: a click Group that prepares configuration and logging,
and the verbosity options of the top-level command.
"""

import logging
import sys

import click

from sylburst.config import load_configuration
from sylburst.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _verbosity(params: dict) -> int:
    if params.get('quiet'):
        return -1
    return params.get('verbose') or 0


class ConfigGroup(click.Group):
    """
    Click Group that loads the configuration into ctx.obj['config'] and sets
    up logging before any subcommand runs. A config already present in
    ctx.obj (e.g. passed by tests) is used as is and logging is left alone.
    """
    def invoke(self, ctx: click.Context):
        if ctx.obj is None:
            ctx.obj = {}

        if 'config' not in ctx.obj:
            try:
                config = load_configuration()
                setup_logging(config, _verbosity(ctx.params))
            except Exception as e:
                logging.getLogger("sylburst.error").critical(f"CLI setup failed: {e!r}", exc_info=True)
                # console logging may not exist yet
                print(f"CRITICAL SETUP ERROR: {e!r}", file=sys.stderr)
                ctx.exit(1)
            ctx.obj['config'] = config
            logger.debug("Configuration and logging ready.")

        return super().invoke(ctx)


# --- Common CLI Options ---
verbose_option = click.option(
    '-v', '--verbose',
    count=True,
    help="Increase verbosity level (-v for INFO, -vv for DEBUG)."
)
quiet_option = click.option(
    '-q', '--quiet',
    is_flag=True,
    default=False,
    help="Suppress all console output except critical errors."
)
