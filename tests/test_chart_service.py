"""Tests for ChartService."""

import matplotlib.pyplot as plt
import pytest

from services.chart_service import TOTAL_LABEL, ChartService, build_accumulation_figure

PNG_MAGIC = b"\x89PNG"


@pytest.fixture
def service(repo):
    return ChartService(repo=repo)


class TestChartService:
    """Tests for the pie and line charts."""

    def test_pie_without_entries(self, service):
        assert service.generate_distribution_pie(1) is None

    def test_pie_with_only_zero_amounts(self, service, repo, make_entry):
        repo.save_entries(1, [make_entry(amount=0)])
        assert service.generate_distribution_pie(1) is None

    def test_pie_png(self, service, repo, make_entry):
        repo.save_entries(1, [make_entry(id=1), make_entry(id=2, name="Rent", amount=800)])

        buf = service.generate_distribution_pie(1)

        assert buf.read(4) == PNG_MAGIC

    def test_line_without_entries(self, service):
        assert service.generate_accumulation_line(1) is None

    def test_line_png(self, service, repo, make_entry):
        repo.save_entries(1, [make_entry(id=i, name=f"Expense {i}", amount=i * 10) for i in range(1, 13)])

        buf = service.generate_accumulation_line(1)

        assert buf.read(4) == PNG_MAGIC

    def test_line_legend_keeps_total_apart(self, make_entry):
        fig = build_accumulation_figure([make_entry(id=1, name="Total", amount=10), make_entry(id=2, name="Rent")])

        _, labels = fig.axes[0].get_legend_handles_labels()
        plt.close(fig)

        assert labels == ["Total", "Rent", TOTAL_LABEL]
        assert labels.count("Total") == 1
