"""
A module for the plots an analyst reads the elongation parameters from: the direction curve of the
azimuth sweep and the log-log frequency-size relationship of the fault heaves.
"""

from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from strainscan.config import load_config
from strainscan.model.direction import first_maximum
from strainscan.model.extrapolation import LOG_HEAVE, LOG_RANK, RANK, rank_heaves
from strainscan.model.faults import ElongationDirection, FractalFit


def get_plot_config():
    """Central appearance settings shared by the plots."""
    return {
        "line_color": "tab:blue",
        "highlight_color": "tab:red",
        "marker": "o",
        "marker_size": 4,
        "grid_alpha": 0.3,
    }


def _setup_axes(ax: Optional[plt.Axes]):
    if ax is None:
        _, ax = plt.subplots()
    return ax


def direction_curve_view(direction, ax: Optional[plt.Axes] = None, window_half_width=None):
    """
    Plot the average apparent offset ratio against candidate azimuth.

    Parameters
    ----------
    direction : ElongationDirection or pd.DataFrame
        A found direction, or a curve with ``azimuth`` and ``ratio`` columns.
    ax : plt.Axes, optional
        Axes to draw on. A new figure is created when None.
    window_half_width : float, optional
        Half width of the shaded fault selection window around the maximum. Default is the
        configured ``window_half_width``, 0 leaves the window out.

    Returns
    -------
    plt.Axes
        The axes drawn on.
    """
    cfg = get_plot_config()
    ax = _setup_axes(ax)

    if isinstance(direction, ElongationDirection):
        curve = direction.curve
        best = direction.azimuth
    else:
        curve = direction
        best, _ = first_maximum(curve)
    if window_half_width is None:
        window_half_width = load_config()["window_half_width"]

    ax.plot(curve["azimuth"], curve["ratio"], color=cfg["line_color"])
    ax.axvline(best, color=cfg["highlight_color"], linestyle="--", label=f"maximum {best:.0f}")
    if window_half_width:
        ax.axvspan(best - window_half_width, best + window_half_width, color=cfg["highlight_color"], alpha=0.1)
    ax.set_xlim(0, 180)
    ax.set_xlabel("Azimuth (degrees)")
    ax.set_ylabel("Average apparent offset ratio")
    ax.grid(alpha=cfg["grid_alpha"])
    ax.legend()
    return ax


def frequency_size_view(heaves, window=None, ax: Optional[plt.Axes] = None):
    """
    Plot log(rank) against log(heave) with the regression window and fitted line.

    Parameters
    ----------
    heaves : FractalFit, pd.DataFrame or array-like
        A fit, a ranked table from `rank_heaves`, or raw heaves to rank.
    window : tuple of int, optional
        Rank window to highlight. Taken from the fit when a `FractalFit` is given.
    ax : plt.Axes, optional
        Axes to draw on. A new figure is created when None.

    Returns
    -------
    plt.Axes
        The axes drawn on.
    """
    cfg = get_plot_config()
    ax = _setup_axes(ax)

    fit = heaves if isinstance(heaves, FractalFit) else None
    if fit is not None:
        ranked = fit.ranked
        window = fit.window if window is None else window
    elif isinstance(heaves, pd.DataFrame) and LOG_RANK in heaves.columns:
        ranked = heaves
    else:
        ranked = rank_heaves(heaves)

    # Zero heaves of the bounding faults have no logarithm
    finite = ranked[np.isfinite(ranked[LOG_HEAVE])]
    ax.plot(finite[LOG_HEAVE], finite[LOG_RANK], cfg["marker"], ms=cfg["marker_size"], color=cfg["line_color"])

    if window is not None:
        lo, hi = window
        in_window = finite[(finite[RANK] >= lo) & (finite[RANK] <= hi)]
        ax.plot(
            in_window[LOG_HEAVE],
            in_window[LOG_RANK],
            cfg["marker"],
            ms=cfg["marker_size"] + 2,
            mfc="none",
            color=cfg["highlight_color"],
            label=f"ranks {lo}-{hi}",
        )
    if fit is not None:
        x = np.linspace(finite[LOG_HEAVE].min(), finite[LOG_HEAVE].max(), 50)
        ax.plot(x, fit.intercept + fit.slope * x, color=cfg["highlight_color"], label=f"C = {fit.slope:.3f}")

    ax.set_xlabel("log(heave)")
    ax.set_ylabel("log(rank)")
    ax.grid(alpha=cfg["grid_alpha"])
    if window is not None or fit is not None:
        ax.legend()
    return ax
