"""
services/chart_service.py
--------------------------
Generates chart images for the expense collection.
Uses matplotlib to draw the distribution pie and the accumulated-cost
line chart and returns them as BytesIO buffers.
"""

import io
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for server use
import matplotlib.pyplot as plt

from repositories.entry_repo import EntryRepository
from services.aggregator import distribution, monthly_series, totals
from utils.formatting import format_money
from utils.logger import get_logger

logger = get_logger(__name__)

COLORS = [
    "#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884D8",
    "#82CA9D", "#A4DE6C", "#D0ED57", "#FFA07A", "#20B2AA",
]
_TOTAL_COLOR = "#222222"
TOTAL_LABEL = "All expenses (total)"


def _to_png(fig) -> io.BytesIO:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight")
    buf.seek(0)
    plt.close(fig)
    return buf


class ChartService:
    """Renders the two charts of the tracker."""

    def __init__(self, repo: Optional[EntryRepository] = None):
        self.repo = repo or EntryRepository()

    def generate_distribution_pie(self, user_id: int) -> io.BytesIO | None:
        """
        Pie chart of each expense's share of the yearly cost.

        Returns:
            BytesIO buffer with PNG image, or None if there is nothing to draw.
        """
        entries = self.repo.load_entries(user_id)
        slices = [(name, value) for name, value in distribution(entries) if value > 0]
        if not slices:
            return None

        labels = [name for name, _ in slices]
        values = [value for _, value in slices]
        colors = [COLORS[i % len(COLORS)] for i in range(len(values))]

        fig, ax = plt.subplots(figsize=(8, 6))
        wedges, _, _ = ax.pie(
            values,
            labels=None,
            autopct=lambda pct: f"{pct:.0f}%",
            colors=colors,
            startangle=90,
            wedgeprops=dict(edgecolor="white", linewidth=1.5),
        )
        ax.legend(
            wedges,
            [f"{l}: {format_money(v)}/yr" for l, v in zip(labels, values)],
            loc="center left",
            bbox_to_anchor=(1, 0, 0.5, 1),
            frameon=False,
        )
        ax.set_title(
            f"Expense Distribution\nYearly total: {format_money(sum(values))}",
            fontsize=14,
            fontweight="bold",
        )
        ax.axis("equal")

        logger.info(f"Generated distribution pie for user {user_id} ({len(values)} slices)")
        return _to_png(fig)

    def generate_accumulation_line(self, user_id: int) -> io.BytesIO | None:
        """
        Line chart of cumulative spend per expense over the year, plus the total.

        Returns:
            BytesIO buffer with PNG image, or None if there are no entries.
        """
        entries = self.repo.load_entries(user_id)
        if not entries:
            return None

        fig = build_accumulation_figure(entries)

        logger.info(f"Generated accumulation line chart for user {user_id}")
        return _to_png(fig)


def build_accumulation_figure(entries):
    """
    Draw one cumulative line per expense name and a dashed aggregate line.

    The aggregate is labelled TOTAL_LABEL so it stays distinguishable from
    an expense that happens to be called "Total".
    """
    series = monthly_series(entries)
    months = [point.month for point in series]
    names = list(series[-1].by_name)

    fig, ax = plt.subplots(figsize=(10, 5))
    for i, name in enumerate(names):
        ax.plot(
            months,
            [point.by_name[name] for point in series],
            label=name,
            color=COLORS[i % len(COLORS)],
            linewidth=1.5,
        )
    ax.plot(
        months,
        [point.total for point in series],
        label=TOTAL_LABEL,
        color=_TOTAL_COLOR,
        linewidth=2.5,
        linestyle="--",
    )

    ax.set_title(
        f"Accumulated Cost Over Year\nYearly total: {format_money(totals(entries).yearly)}",
        fontsize=13,
        fontweight="bold",
    )
    ax.set_ylabel("Cumulative cost")
    ax.grid(alpha=0.3)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(loc="upper left", fontsize=9, frameon=False)
    fig.tight_layout()
    return fig
