"""
Visualization utilities for GenEvolve.

These helpers are tolerant to empty inputs so a run can always emit its
plots, even when it stopped before the first generation was recorded.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Sequence, Union

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


def _prepare_output_path(output_path: Union[str, Path]) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _save_figure(fig: plt.Figure, output_path: Union[str, Path]) -> None:
    path = _prepare_output_path(output_path)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def _history_frame(history: Union[pd.DataFrame, Sequence[Dict[str, Any]], None]) -> pd.DataFrame:
    if isinstance(history, pd.DataFrame):
        return history if "generation" in history.columns else history.reset_index()
    return pd.DataFrame(list(history or []))


def plot_fitness_history(
    history: Union[pd.DataFrame, Sequence[Dict[str, Any]]],
    output_path: Union[str, Path],
) -> None:
    """
    Plot best and mean fitness per generation.

    Args:
        history: ``EvolutionStats.history`` records or ``EvolutionStats.to_dataframe()``
        output_path: Image file to write
    """
    frame = _history_frame(history)
    fig, ax = plt.subplots(figsize=(10, 5))

    if frame.empty or "generation" not in frame.columns:
        ax.text(0.5, 0.5, "No generation history", ha="center", va="center")
        ax.set_axis_off()
        _save_figure(fig, output_path)
        return

    generations = frame["generation"].to_numpy(dtype=int)
    best = frame.get("best_fitness", pd.Series(np.zeros(len(frame)))).to_numpy(dtype=float)
    mean = frame.get("mean_fitness", pd.Series(np.zeros(len(frame)))).to_numpy(dtype=float)

    ax.plot(generations, best, label="Best Fitness", linewidth=2, color="tab:blue")
    ax.plot(generations, mean, label="Mean Fitness", linewidth=2, color="tab:orange", alpha=0.8)
    ax.set_title("Fitness vs Generation")
    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness")
    ax.legend()
    ax.grid(alpha=0.2)
    _save_figure(fig, output_path)
