# sylburst/cli/segment_cmd.py

"""
CLI commands for segmenting sounds into syllables and bursts.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
import pandas as pd
from tabulate import tabulate

from sylburst.config.models import SylburstConfig, SegmentParams
from sylburst.core.segmentation import segment
from sylburst.core.batch_processor import segment_folder
from sylburst.core.summary import syllables_to_frame, bursts_to_frame
from sylburst.core.types import SegmentationResult, SegmentationSummary

logger = logging.getLogger(__name__)

SAVE_FORMATS = {".csv", ".json"}


class OptionalFloat(click.ParamType):
    """A float, or 'none' to disable the feature."""
    name = "float|none"

    def convert(self, value, param, ctx):
        if value is None or isinstance(value, float):
            return value
        if str(value).lower() in ("none", "na", "off"):
            return "none"
        try:
            return float(value)
        except ValueError:
            self.fail(f"{value!r} is not a number or 'none'", param, ctx)


# --- Shared segmentation options ---
_PARAM_OPTIONS = [
    click.option("--window-length", type=float, default=None, help="Smoothing window length, ms."),
    click.option("--overlap", type=float, default=None, help="Smoothing window overlap, % (clamped to 0-99)."),
    click.option("--shortest-syl", type=float, default=None, help="Minimum syllable length, ms."),
    click.option("--shortest-pause", type=OptionalFloat(), default=None,
                 help="Merge syllables separated by shorter pauses, ms ('none' disables merging)."),
    click.option("--syl-thres", type=float, default=None, help="Syllable threshold as a proportion of mean amplitude."),
    click.option("--interburst", type=OptionalFloat(), default=None,
                 help="Minimum time between bursts, ms (overrides --interburst-mult; 'none' derives it from syllable length)."),
    click.option("--interburst-mult", type=float, default=None, help="Multiplier of median syllable length for the inter-burst window."),
    click.option("--burst-thres", type=float, default=None, help="Minimum burst height as a proportion of the global maximum."),
    click.option("--peak-to-trough", type=float, default=None, help="Minimum peak-to-trough ratio of bursts."),
    click.option("--trough-left/--no-trough-left", default=None, help="Compare bursts to the trough on the left."),
    click.option("--trough-right/--no-trough-right", default=None, help="Compare bursts to the trough on the right."),
]

_PARAM_NAMES = [
    "window_length", "overlap", "shortest_syl", "shortest_pause", "syl_thres", "interburst",
    "interburst_mult", "burst_thres", "peak_to_trough", "trough_left", "trough_right",
]


def segment_param_options(func):
    """Decorator adding all segmentation parameter options to a command."""
    for option in reversed(_PARAM_OPTIONS):
        func = option(func)
    return func


def _get_config(ctx: click.Context) -> SylburstConfig:
    config = ctx.obj.get('config') if isinstance(ctx.obj, dict) else None
    return config if config is not None else SylburstConfig()


def _build_params(ctx: click.Context, options: Dict[str, Any]) -> SegmentParams:
    """Merges command-line options over the configured segmentation defaults."""
    base = _get_config(ctx).segmentation.model_dump()
    for name in _PARAM_NAMES:
        value = options.get(name)
        if value is None:
            continue
        base[name] = None if value == "none" else value
    try:
        return SegmentParams(**base)
    except ValueError as e:
        raise click.UsageError(f"Invalid segmentation parameters: {e}")


def _save_frame(frame: pd.DataFrame, output_path: Path):
    """Saves a DataFrame as CSV or JSON depending on the extension."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        frame.to_csv(output_path, index=False)
    else:
        frame.to_json(output_path, orient="records", indent=2)
    logger.info(f"Saved {len(frame)} rows to {output_path}")


def _check_output(ctx: click.Context, output: Optional[str]) -> Optional[Path]:
    if output is None:
        return None
    output_path = Path(output)
    if not output_path.suffix:
        output_path = output_path.with_suffix(f".{_get_config(ctx).defaults.default_output_format}")
    if output_path.suffix.lower() not in SAVE_FORMATS:
        raise click.UsageError(f"Unsupported output format '{output_path.suffix}'. Use one of {sorted(SAVE_FORMATS)}.")
    return output_path


def _sibling(path: Path, suffix: str) -> Path:
    return path.with_name(f"{path.stem}_{suffix}{path.suffix}")


def _echo_summary(summary: SegmentationSummary):
    rows = [(key, "NA" if value is None else value) for key, value in summary.to_dict().items()]
    click.echo(tabulate(rows, headers=["Metric", "Value"], floatfmt=".2f"))


def _echo_detailed(result: SegmentationResult):
    syl_frame = syllables_to_frame(result.syllables)
    burst_frame = bursts_to_frame(result.bursts)
    click.echo(f"Syllables ({len(syl_frame)}):")
    if not syl_frame.empty:
        click.echo(tabulate(syl_frame, headers="keys", showindex=False, floatfmt=".1f", missingval="NA"))
    click.echo(f"\nBursts ({len(burst_frame)}):")
    if not burst_frame.empty:
        click.echo(tabulate(burst_frame, headers="keys", showindex=False, floatfmt=".3f", missingval="NA"))


# --- Main Segment Command Group ---
@click.group("segment")
@click.pass_context
def segment_cmd(ctx):
    """Find syllables and vocal bursts in sounds."""
    pass


@segment_cmd.command("file")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@segment_param_options
@click.option("--summary", is_flag=True, default=False, help="Report only summary statistics.")
@click.option("--plot", "plot_dir", type=click.Path(file_okay=False, resolve_path=True), default=None,
              help="Directory in which to save a segmentation plot.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, resolve_path=True), default=None,
              help="Save results to a .csv or .json file (detailed mode writes *_syllables and *_bursts files).")
@click.pass_context
def segment_file_cmd(ctx, input_file: str, summary: bool, plot_dir: Optional[str], output: Optional[str], **options):
    """Segment a single audio file."""
    input_path = Path(input_file)
    output_path = _check_output(ctx, output)
    params = _build_params(ctx, options)
    logger.info(f"Segmenting: {input_path}")
    logger.debug(f"Params: {params.model_dump()}")

    try:
        result = segment(input_path, params=params, summary=summary, save_path=plot_dir)
    except FileNotFoundError:
        raise click.UsageError(f"Input file not found: {input_path}")
    except ValueError as e:
        raise click.UsageError(f"Error during segmentation: {e}")
    except Exception as e:
        logger.error(f"An unexpected error occurred during segmentation: {e}", exc_info=True)
        raise click.Abort(f"An unexpected error occurred: {e}")

    if summary:
        _echo_summary(result)
        if output_path is not None:
            _save_frame(pd.DataFrame([{"sound": input_path.name, **result.to_dict()}]), output_path)
    else:
        _echo_detailed(result)
        if output_path is not None:
            _save_frame(syllables_to_frame(result.syllables), _sibling(output_path, "syllables"))
            _save_frame(bursts_to_frame(result.bursts), _sibling(output_path, "bursts"))

    if output_path is not None:
        click.echo(f"Results saved in '{output_path.parent}'.")


@segment_cmd.command("folder")
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@segment_param_options
@click.option("--detailed", is_flag=True, default=False, help="Report every syllable and burst instead of a summary per file.")
@click.option("--report-every", type=int, default=None, help="Report progress every N files.")
@click.option("--plot", "plot_dir", type=click.Path(file_okay=False, resolve_path=True), default=None,
              help="Directory in which to save one segmentation plot per file.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, resolve_path=True), default=None,
              help="Save results to a .csv or .json file (detailed mode writes *_syllables and *_bursts files).")
@click.pass_context
def segment_folder_cmd(ctx, input_dir: str, detailed: bool, report_every: Optional[int],
                       plot_dir: Optional[str], output: Optional[str], **options):
    """Segment every audio file in a folder."""
    output_path = _check_output(ctx, output)
    params = _build_params(ctx, options)
    batch_cfg = _get_config(ctx).batch

    try:
        result = segment_folder(
            input_dir,
            params=params,
            summary=not detailed,
            save_path=plot_dir,
            verbose=batch_cfg.verbose,
            report_every=report_every if report_every is not None else batch_cfg.report_every,
            extensions=batch_cfg.extensions,
        )
    except FileNotFoundError:
        raise click.UsageError(f"Input directory not found: {input_dir}")
    except ValueError as e:
        raise click.UsageError(f"Error during segmentation: {e}")
    except Exception as e:
        logger.error(f"An unexpected error occurred during folder segmentation: {e}", exc_info=True)
        raise click.Abort(f"An unexpected error occurred: {e}")

    if not detailed:
        if result.empty:
            click.echo("Warning: No audio files were segmented.")
            return
        click.echo(tabulate(result, headers="keys", showindex=False, floatfmt=".2f", missingval="NA"))
        if output_path is not None:
            _save_frame(result, output_path)
    else:
        if not result:
            click.echo("Warning: No audio files were segmented.")
            return
        rows = [(Path(name).name, len(r.syllables), len(r.bursts)) for name, r in result.items()]
        click.echo(tabulate(rows, headers=["sound", "n_syl", "n_bursts"]))
        if output_path is not None:
            syl_frames = [syllables_to_frame(r.syllables).assign(sound=Path(name).name) for name, r in result.items()]
            burst_frames = [bursts_to_frame(r.bursts).assign(sound=Path(name).name) for name, r in result.items()]
            _save_frame(pd.concat(syl_frames, ignore_index=True), _sibling(output_path, "syllables"))
            _save_frame(pd.concat(burst_frames, ignore_index=True), _sibling(output_path, "bursts"))

    if output_path is not None:
        click.echo(f"Results saved in '{output_path.parent}'.")
