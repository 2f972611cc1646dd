# sylburst/core/batch_processor.py

"""
Segments all audio files in a folder with shared parameters.

Summary mode collects one summary row per file into a DataFrame; detailed
mode returns the full results keyed by file path.
"""

import logging
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from sylburst.config.models import SegmentParams
from .segmentation import segment, resolve_params
from .summary import summaries_to_frame
from .types import SegmentationResult, SegmentationSummary

logger = logging.getLogger(__name__)


def _format_duration(seconds: float) -> str:
    seconds = int(round(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours} h {minutes} min {secs} s"
    if minutes:
        return f"{minutes} min {secs} s"
    return f"{secs} s"


def report_time(
    i: int,
    n_iter: int,
    time_start: float,
    jobs: Optional[Sequence[float]] = None
) -> float:
    """
    Logs progress after `i` of `n_iter` jobs and returns the estimated time left (s).

    With `jobs` (relative job sizes, e.g. file sizes) the estimate assumes time
    proportional to size; otherwise every job is assumed to take equally long.
    """
    elapsed = time.monotonic() - time_start
    if jobs is not None and len(jobs) == n_iter and sum(jobs[:i]) > 0:
        done_share = sum(jobs[:i]) / sum(jobs)
    else:
        done_share = i / n_iter if n_iter else 1.0
    time_left = elapsed / done_share - elapsed if done_share > 0 else 0.0
    logger.info(f"Done {i} / {n_iter}; elapsed {_format_duration(elapsed)}, "
                f"time left: {_format_duration(time_left)}")
    return time_left


def list_audio_files(folder: Path, extensions: Iterable[str] = (".wav",)) -> List[Path]:
    """Files in `folder` (non-recursive) whose extension matches, sorted by name."""
    wanted = {ext.lower() for ext in extensions}
    return sorted(p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in wanted)


def segment_folder(
    folder: Union[str, Path],
    params: Optional[SegmentParams] = None,
    summary: bool = True,
    plot: bool = False,
    save_path: Optional[Union[str, Path]] = None,
    verbose: bool = True,
    report_every: int = 10,
    extensions: Iterable[str] = (".wav",),
    **overrides
) -> Union[pd.DataFrame, Dict[str, SegmentationResult]]:
    """
    Finds syllables and bursts in all audio files in a folder.

    Args:
        folder: Directory containing the audio files.
        params: Segmentation parameters shared by all files.
        summary: If True, return a DataFrame with one row per file (first column
                 'sound' holds the file name). If False, return a dict mapping
                 each file path to its SegmentationResult.
        plot: Show a plot for every file.
        save_path: Directory for per-file plots ('<file stem>.jpg').
        verbose: If True, report progress every `report_every` files.
        report_every: Progress reporting interval (files).
        extensions: File extensions to process.
        **overrides: Individual SegmentParams fields overriding `params`.

    Raises:
        FileNotFoundError: If the folder does not exist.
        ValueError: If `report_every` < 1 or parameters are invalid.
        TypeError: If an override is not a SegmentParams field.
        # Individual file errors are logged and skipped.
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"Input directory not found: {folder}")
    if report_every < 1:
        raise ValueError(f"report_every must be >= 1, got {report_every}.")
    params = resolve_params(params, overrides)

    filenames = list_audio_files(folder, extensions)
    filesizes = [p.stat().st_size for p in filenames]
    logger.info(f"Segmenting {len(filenames)} files in '{folder}'")

    time_start = time.monotonic()
    summaries: List[SegmentationSummary] = []
    sounds: List[str] = []
    detailed: Dict[str, SegmentationResult] = {}
    skipped_count = 0

    for i, file_path in enumerate(filenames, start=1):
        try:
            result = segment(file_path, params=params, summary=summary, plot=plot, save_path=save_path)
        except FileNotFoundError:
            logger.error(f"Input file not found during batch processing: {file_path.name}. Skipping.")
            skipped_count += 1
        except ValueError as e:
            logger.error(f"Value error processing file {file_path.name}: {e}. Skipping.")
            skipped_count += 1
        except Exception as e:
            logger.error(f"Unexpected error processing file {file_path.name}: {e}", exc_info=True)
            skipped_count += 1
        else:
            if summary:
                summaries.append(result)
                sounds.append(file_path.name)
            else:
                detailed[str(file_path)] = result

        if verbose and i % report_every == 0:
            report_time(i, len(filenames), time_start, jobs=filesizes)

    logger.info(f"Folder segmentation finished. Processed: {len(filenames) - skipped_count}, Skipped: {skipped_count}")
    if summary:
        return summaries_to_frame(summaries, sounds)
    return detailed
