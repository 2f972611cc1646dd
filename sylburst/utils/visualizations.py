# sylburst/utils/visualizations.py

"""
Plots of segmentation results using Matplotlib.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np

from ..core.types import Envelope, Syllable, Burst

logger = logging.getLogger(__name__)


def plot_segmentation(
    envelope: Envelope,
    threshold: float,
    syllables: Sequence[Syllable],
    bursts: Sequence[Burst],
    output_file: Optional[Union[str, Path]] = None,
    title: str = "",
    **plot_kwargs
):
    """
    Plot the amplitude envelope with detected syllables and bursts.

    Syllables are drawn as horizontal bars at the threshold level, bursts as
    stars on the envelope.

    Args:
        envelope: Amplitude envelope that was segmented.
        threshold: Syllable threshold (absolute amplitude).
        syllables: Detected syllables.
        bursts: Detected bursts.
        output_file: If given, the plot is saved there (format from the
                     extension) and the figure is closed. Otherwise it is shown.
        title: Title for the plot.
        **plot_kwargs: Extra keyword arguments for the envelope line.
    """
    fig = None
    try:
        fig, ax = plt.subplots(figsize=(9, 5))
        line_kwargs = {"color": "green"}
        line_kwargs.update(plot_kwargs)
        ax.plot(envelope.time, envelope.amplitude, **line_kwargs)
        for syl in syllables:
            ax.hlines(threshold, syl.start, syl.end, colors="blue", linewidth=2)
        if bursts:
            ax.scatter([b.time for b in bursts], [b.amplitude for b in bursts],
                       marker="*", s=150, color="red", zorder=3)
        ax.set_xlabel("Time, ms")
        ax.set_ylabel("Amplitude")
        ax.set_title(title)
        ax.set_ylim(bottom=0, top=max(float(np.max(envelope.amplitude, initial=0.0)), threshold) * 1.05 or 1.0)
        fig.tight_layout()

        if output_file is not None:
            output_file = Path(output_file)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_file, dpi=100, bbox_inches="tight")
            logger.info(f"Segmentation plot saved to {output_file}")
        else:
            plt.show()
    except Exception as e:
        logger.error(f"Failed to generate/save segmentation plot: {e}")
    finally:
        if fig is not None:
            plt.close(fig)
