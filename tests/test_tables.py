"""Tests for tabular views and the text report."""

from __future__ import annotations

import pytest

from seismic_dynamic.analysis.pipeline import SeismicAnalysisPipeline
from seismic_dynamic.data.tables import SeismicTables, generate_text_report


@pytest.fixture
def pipeline(config):
    return SeismicAnalysisPipeline(config)


class TestSeismicTables:
    def test_dynamic_tables(self, pipeline, building, site) -> None:
        tables = SeismicTables.from_result(pipeline.run_dynamic(building, site))
        assert len(tables.spectrum) == 1001
        assert list(tables.spectrum.columns) == ['Period', 'Sa', 'Sv', 'Sd']
        assert len(tables.stories) == 5
        assert len(tables.modal) == 15
        assert tables.modal['SumUX'].is_monotonic_increasing
        assert len(tables.time_history) == 1500
        assert tables.verdicts['Status'].isin(['pass', 'fail', 'warning']).all()

    def test_static_tables(self, pipeline, building, site) -> None:
        """Static results have no modal or time-history table."""
        tables = SeismicTables.from_result(pipeline.run_static(building, site))
        assert tables.modal is None
        assert tables.time_history is None
        summary = tables.get_table_summary()
        assert summary['modal'] == {'has_data': False, 'row_count': 0}
        assert summary['stories'] == {'has_data': True, 'row_count': 5}


class TestTextReport:
    def test_dynamic_report(self, pipeline, building, site) -> None:
        report = generate_text_report(pipeline.run_dynamic(building, site))
        assert report.startswith("=" * 60)
        assert "REPORTE DE ANÁLISIS SÍSMICO" in report
        assert "Categoría de diseño sísmico: E" in report
        assert "ANÁLISIS MODAL:" in report
        assert "semilla 42" in report
        assert "FUERZA LATERAL EQUIVALENTE:" not in report

    def test_combined_report(self, pipeline, building, site) -> None:
        report = generate_text_report(pipeline.run_combined(building, site))
        assert "ANÁLISIS MODAL:" in report
        assert "FUERZA LATERAL EQUIVALENTE:" in report
        assert "RECOMENDACIONES:" in report
