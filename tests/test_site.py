"""Tests for site parameter resolution."""

from __future__ import annotations

import pytest

from seismic_dynamic.analysis.site import SeismicParameterResolver, normalize_site_class
from seismic_dynamic.core.config import AnalysisConfig
from seismic_dynamic.data.seismic_data import SiteInput
from seismic_dynamic.utils.validators import InvalidSiteParameter


class TestNormalizeSiteClass:
    @pytest.mark.parametrize("raw, expected", [
        ('SC', 'SC'), ('sc', 'SC'), (' SD ', 'SD'), ('E', 'SE'), ('a', 'SA'),
    ])
    def test_aliases(self, raw: str, expected: str) -> None:
        """Single letters and lower case map to the canonical class."""
        assert normalize_site_class(raw) == expected

    def test_unknown(self) -> None:
        """Unknown classes are not normalized."""
        assert normalize_site_class('SZ') is None
        assert normalize_site_class('') is None


class TestResolver:
    def test_design_values(self, profile) -> None:
        """SC with Ss=1.0 and S1=0.4 gives SDS=0.8 and SD1=0.4."""
        assert profile.site_class == 'SC'
        assert profile.fa == pytest.approx(1.2)
        assert profile.fv == pytest.approx(1.5)
        assert profile.sms == pytest.approx(1.2)
        assert profile.sm1 == pytest.approx(0.6)
        assert profile.sds == pytest.approx(0.8)
        assert profile.sd1 == pytest.approx(0.4)

    def test_derived_parameters(self, profile) -> None:
        """PGA, PGV, PGD and site metadata are derived from the input."""
        assert profile.pga == pytest.approx(0.4)
        assert profile.pgv == pytest.approx(40.0)
        assert profile.pgd == pytest.approx(20.0)
        assert profile.vs30 == pytest.approx(350.0)
        assert profile.site_class_ordinal == 2
        assert profile.importance_factor == pytest.approx(1.0)
        assert profile.latitude == pytest.approx(-7.8)

    def test_high_intensity_reduction(self) -> None:
        """Fa and Fv drop 10% when Ss > 1.5 or S1 > 0.75."""
        site = SiteInput(site_class='SD', ss=2.0, s1=0.8)
        profile = SeismicParameterResolver().resolve(site)
        assert profile.fa == pytest.approx(1.26)
        assert profile.fv == pytest.approx(1.8)

    def test_interpolated_coefficients(self) -> None:
        """Interpolation between tabulated Ss and S1 values."""
        config = AnalysisConfig(interpolate_site_coefficients=True)
        site = SiteInput(site_class='SC', ss=0.6, s1=0.35)
        profile = SeismicParameterResolver(config).resolve(site)
        assert profile.fa == pytest.approx(1.16)
        assert profile.fv == pytest.approx(1.45)

    def test_interpolation_clamps(self) -> None:
        """Values outside the table use the nearest tabulated coefficient."""
        config = AnalysisConfig(interpolate_site_coefficients=True)
        site = SiteInput(site_class='SC', ss=2.0, s1=0.05)
        profile = SeismicParameterResolver(config).resolve(site)
        assert profile.fa == pytest.approx(1.0)
        assert profile.fv == pytest.approx(1.7)

    def test_explicit_coefficients_override(self) -> None:
        """Fa and Fv given in the input take precedence over the table."""
        site = SiteInput(site_class='SC', ss=1.0, s1=0.4, fa=1.0, fv=1.0)
        profile = SeismicParameterResolver().resolve(site)
        assert profile.sds == pytest.approx(2.0 / 3.0)
        assert profile.sd1 == pytest.approx(0.4 * 2.0 / 3.0)

    def test_risk_category_importance(self) -> None:
        """Risk category IV carries Ie = 1.5."""
        site = SiteInput(site_class='SC', ss=1.0, s1=0.4, risk_category='IV')
        assert SeismicParameterResolver().resolve(site).importance_factor == pytest.approx(1.5)

    def test_zero_accelerations(self) -> None:
        """A site with no hazard resolves to zero design values."""
        profile = SeismicParameterResolver().resolve(SiteInput(site_class='SB', ss=0.0, s1=0.0))
        assert profile.sds == 0.0
        assert profile.sd1 == 0.0


class TestResolverErrors:
    def test_unknown_site_class(self) -> None:
        """An unknown site class is rejected without fallback."""
        with pytest.raises(InvalidSiteParameter):
            SeismicParameterResolver().resolve(SiteInput(site_class='SZ', ss=1.0, s1=0.4))

    def test_fallback_site_class(self, caplog) -> None:
        """With fallback enabled the configured class is used and logged."""
        config = AnalysisConfig(allow_site_class_fallback=True, fallback_site_class='SD')
        with caplog.at_level('WARNING'):
            profile = SeismicParameterResolver(config).resolve(
                SiteInput(site_class='SZ', ss=1.0, s1=0.4))
        assert profile.site_class == 'SD'
        assert any('SZ' in record.getMessage() for record in caplog.records)

    @pytest.mark.parametrize("ss, s1", [(-0.1, 0.4), (1.0, -0.2)])
    def test_negative_accelerations(self, ss: float, s1: float) -> None:
        """Negative mapped accelerations are rejected."""
        with pytest.raises(InvalidSiteParameter) as excinfo:
            SeismicParameterResolver().resolve(SiteInput(site_class='SC', ss=ss, s1=s1))
        assert excinfo.value.field in ('ss', 's1')

    def test_unknown_risk_category(self) -> None:
        """Risk categories outside I-IV are rejected."""
        with pytest.raises(InvalidSiteParameter):
            SeismicParameterResolver().resolve(
                SiteInput(site_class='SC', ss=1.0, s1=0.4, risk_category='V'))
