"""Precursor coverage of m/z windows.

Tabulates, for each caller-supplied (start_mz, stop_mz) window, the fraction
of precursor m/z values lying strictly inside it. Windows may overlap
(sliding windows); no clustering or optimisation happens here.

Examples
--------
>>> buckets = calculate_coverage([150.0, 300.0, 500.0, 900.0], [(200.0, 800.0)])
>>> buckets[0].fraction
0.5
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import numba

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverageBucket:
    """Fraction of precursors inside one m/z window."""

    start_mz: float
    stop_mz: float
    fraction: float


@numba.jit(nopython=True, cache=True)
def count_in_windows(
    mz_values: np.ndarray,
    starts: np.ndarray,
    stops: np.ndarray,
) -> np.ndarray:
    """Count m/z values with start < mz < stop for each window (Numba-compiled).

    Parameters
    ----------
    mz_values : np.ndarray (float64)
        Precursor m/z values, sorted ascending
    starts, stops : np.ndarray (float64)
        Window bounds

    Returns
    -------
    counts : np.ndarray (int64)
    """
    counts = np.zeros(len(starts), dtype=np.int64)
    for i in range(len(starts)):
        # Strict bounds: first index > start, first index >= stop
        lo = np.searchsorted(mz_values, starts[i], side='right')
        hi = np.searchsorted(mz_values, stops[i], side='left')
        if hi > lo:
            counts[i] = hi - lo
    return counts


def _window_arrays(windows) -> Tuple[np.ndarray, np.ndarray]:
    bounds = np.asarray(list(windows), dtype=np.float64)
    if bounds.size == 0:
        return np.zeros(0, dtype=np.float64), np.zeros(0, dtype=np.float64)
    if bounds.ndim != 2 or bounds.shape[1] != 2:
        raise ValueError(f"Windows must be (start_mz, stop_mz) pairs, got shape {bounds.shape}")

    starts = np.ascontiguousarray(bounds[:, 0])
    stops = np.ascontiguousarray(bounds[:, 1])
    bad = np.flatnonzero(starts >= stops)
    if len(bad):
        i = bad[0]
        raise ValueError(f"Window {i} has start_mz >= stop_mz: ({starts[i]}, {stops[i]})")
    return starts, stops


def calculate_coverage(
    mz_values: Iterable[float],
    windows: Iterable[Tuple[float, float]],
) -> List[CoverageBucket]:
    """Fraction of precursor m/z values falling strictly inside each window.

    Parameters
    ----------
    mz_values : iterable of float
        Precursor m/z values (any order)
    windows : iterable of (start_mz, stop_mz)
        Window definitions, kept in input order; may overlap

    Returns
    -------
    buckets : List[CoverageBucket]
        One bucket per window. With no m/z values every fraction is 0.0.

    Raises
    ------
    ValueError
        If a window is not a pair or has start_mz >= stop_mz
    """
    mz = np.sort(np.asarray(list(mz_values), dtype=np.float64))
    starts, stops = _window_arrays(windows)

    if len(mz) == 0:
        logger.warning("No precursor m/z values; all window fractions are 0")
        fractions = np.zeros(len(starts), dtype=np.float64)
    else:
        fractions = count_in_windows(mz, starts, stops) / len(mz)

    return [
        CoverageBucket(float(start), float(stop), float(fraction))
        for start, stop, fraction in zip(starts, stops, fractions)
    ]


def make_sliding_windows(
    start_mz: float,
    stop_mz: float,
    width: float,
    step: float,
) -> List[Tuple[float, float]]:
    """Generate fixed-width windows every `step` Th from start_mz to stop_mz.

    The last window is the last one whose stop does not exceed `stop_mz`.
    Windows overlap when step < width.

    Examples
    --------
    >>> make_sliding_windows(400.0, 420.0, 10.0, 5.0)
    [(400.0, 410.0), (405.0, 415.0), (410.0, 420.0)]
    """
    if width <= 0 or step <= 0:
        raise ValueError(f"width and step must be > 0, got width={width}, step={step}")
    if stop_mz <= start_mz:
        raise ValueError(f"stop_mz must exceed start_mz, got ({start_mz}, {stop_mz})")

    n_windows = int(np.floor((stop_mz - start_mz - width) / step + 1e-9)) + 1
    return [
        (start_mz + i * step, start_mz + i * step + width)
        for i in range(max(n_windows, 0))
    ]


def windows_from_dataframe(
    df,
    start_column: str = "start_mz",
    stop_column: str = "stop_mz",
) -> List[Tuple[float, float]]:
    """Read (start, stop) pairs from a window-placement table, rows in order."""
    missing = [c for c in (start_column, stop_column) if c not in df.columns]
    if missing:
        raise ValueError(f"Window table lacks column(s): {missing}")
    return [
        (float(start), float(stop))
        for start, stop in zip(df[start_column], df[stop_column])
    ]


def coverage_to_dataframe(buckets: Sequence[CoverageBucket]):
    """Tabulate buckets as a pandas DataFrame (start_mz, stop_mz, fraction)."""
    import pandas as pd

    return pd.DataFrame(
        [(b.start_mz, b.stop_mz, b.fraction) for b in buckets],
        columns=["start_mz", "stop_mz", "fraction"],
    )
