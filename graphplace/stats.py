"""Statistics collected while optimising a placement, and CSV export helpers."""

from __future__ import annotations

import csv
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import groupby
from pathlib import Path
from typing import Any

CSV_SEPARATOR = ";"


def _fmt(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


@dataclass
class ValIter:
    """A value together with the iteration at which it was obtained."""

    val: Any
    iter: int

    def __lt__(self, other: ValIter) -> bool:
        if not isinstance(other, ValIter):
            return NotImplemented
        return self.val < other.val

    def __str__(self) -> str:
        return f"({self.iter},{_fmt(self.val)})"


@dataclass
class ValFreq:
    """A value with how often it occurs out of a total."""

    val: Any
    freq: int
    total: int

    def __lt__(self, other: ValFreq) -> bool:
        if not isinstance(other, ValFreq):
            return NotImplemented
        return self.val < other.val

    def __str__(self) -> str:
        percentage = 100.0 * self.freq / self.total
        return f"{_fmt(self.val)} : {percentage:g}% ({self.freq}/{self.total})\n"


def merge_scores(scores: Sequence[Sequence[ValIter]]) -> list[list[ValIter]]:
    """Align several series so that they all share the same iterations.

    At every iteration present in any series, each series carries its latest
    known value (0 before its first value).
    """
    merged: list[list[ValIter]] = [[] for _ in scores]
    positions = [0] * len(scores)
    finished = sum(1 for series in scores if not series)
    while finished < len(scores):
        iter_min = min(
            series[pos].iter
            for series, pos in zip(scores, positions)
            if pos < len(series)
        )
        for i, series in enumerate(scores):
            if positions[i] < len(series) and series[positions[i]].iter == iter_min:
                positions[i] += 1
                if positions[i] == len(series):
                    finished += 1
            if positions[i] == 0:
                merged[i].append(ValIter(0, iter_min))
            else:
                merged[i].append(ValIter(series[positions[i] - 1].val, iter_min))
    return merged


def write_csv_valiter(vals: Sequence[Sequence[ValIter]], path: str | Path) -> None:
    """Write merged series: a header row of iterations, then one row per series."""
    table = merge_scores(vals)
    lines = []
    header = ["Iter"] + [str(v.iter) for v in (table[0] if table else [])]
    lines.append(CSV_SEPARATOR.join(header))
    for number, series in enumerate(table, start=1):
        lines.append(CSV_SEPARATOR.join([f"Donnees {number}"] + [_fmt(v.val) for v in series]))
    Path(path).write_text("".join(line + "\n" for line in lines))


def write_csv(rows: Sequence[Sequence[Any]], path: str | Path) -> None:
    """Write each row as a line of separator-joined cells."""
    Path(path).write_text(
        "".join(CSV_SEPARATOR.join(_fmt(cell) for cell in row) + "\n" for row in rows)
    )


def _split_cells(line: str) -> list[str]:
    cells = line.split(CSV_SEPARATOR)
    if cells[-1] == "":
        cells.pop()
    return cells


def transpose_csv(path: str | Path) -> None:
    """Swap rows and columns of a CSV file in place."""
    with open(path, newline=None) as handle:
        data = [_split_cells(line.rstrip("\n")) for line in handle]
    width = max((len(row) for row in data), default=0)
    transposed = [
        [row[j] if j < len(row) else "" for row in data] for j in range(width)
    ]
    with open(path, "w", newline="") as handle:
        writer = csv.writer(handle, delimiter=CSV_SEPARATOR, lineterminator="\n",
                            quoting=csv.QUOTE_NONE, escapechar="\\")
        writer.writerows(transposed)


def frequencies(values: Sequence[ValIter]) -> list[ValFreq]:
    """Return how often each distinct value occurs, sorted by value."""
    if not values:
        raise ValueError("cannot compute frequencies of an empty sequence")
    ordered = sorted(values, key=lambda v: v.val)
    total = len(ordered)
    return [
        ValFreq(val, sum(1 for _ in group), total)
        for val, group in groupby(ordered, key=lambda v: v.val)
    ]


def acceptance_stats(
    accepted: Sequence[ValIter], improve: Sequence[ValIter], block_size: int
) -> list[list[ValIter]]:
    """Count move outcomes per block of iterations.

    Rows: refused deteriorations, accepted deteriorations, accepted neutral
    moves, accepted improvements.
    """
    if block_size <= 0:
        raise ValueError(f"block size must be positive, got {block_size}")
    stats: list[list[ValIter]] = [[] for _ in range(4)]
    for start in range(0, len(accepted), block_size):
        counts = [0.0] * 4
        for acc, imp in zip(accepted[start:start + block_size], improve[start:start + block_size]):
            if acc.val:
                if imp.val > 0:
                    counts[3] += 1
                elif imp.val == 0:
                    counts[2] += 1
                else:
                    counts[1] += 1
            else:
                counts[0] += 1
        for row, count in zip(stats, counts):
            row.append(ValIter(count, start))
    return stats


def max_deterioration_stats(scores: Sequence[ValIter]) -> list[list[ValIter]]:
    """Track the score height and the rise since the lowest height reached.

    Row 0 is the cumulative change of score, row 1 the climb since the last minimum.
    """
    heights: list[ValIter] = []
    rises: list[ValIter] = []
    height = 0
    lowest = 0
    for previous, current in zip(scores, scores[1:]):
        height = int(height + (current.val - previous.val))
        lowest = min(lowest, height)
        heights.append(ValIter(float(height), current.iter))
        rises.append(ValIter(float(height - lowest), current.iter))
    return [heights, rises]