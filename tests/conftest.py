"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from seismic_dynamic.analysis.site import SeismicParameterResolver
from seismic_dynamic.analysis.spectrum import ResponseSpectrumBuilder
from seismic_dynamic.core.config import AnalysisConfig
from seismic_dynamic.data.seismic_data import (
    BuildingGeometry,
    BuildingModel,
    GroundMotionRecord,
    MassDistribution,
    SiteInput,
    StoryResponse,
)

FLOOR_HEIGHT = 3.0
NUMBER_OF_FLOORS = 5
TOTAL_MASS = 1.0e6


def make_building(number_of_floors: int = NUMBER_OF_FLOORS, floor_height: float = FLOOR_HEIGHT,
                  length: float = 30.0, width: float = 20.0, total_mass: float = TOTAL_MASS,
                  irregular: bool = False, **kwargs) -> BuildingModel:
    """Build a simple uniform building model."""
    return BuildingModel(
        geometry=BuildingGeometry(length=length, width=width, floor_height=floor_height,
                                  number_of_floors=number_of_floors, irregular=irregular),
        masses=MassDistribution(total_mass=total_mass),
        **kwargs,
    )


def make_stories(drifts, floor_height: float = FLOOR_HEIGHT):
    """Story responses with the given inter-story drifts (m)."""
    displacements = np.cumsum(drifts)
    return tuple(
        StoryResponse(
            floor=i + 1,
            elevation=floor_height * (i + 1),
            force_x=0.0,
            force_y=0.0,
            story_shear_x=0.0,
            story_shear_y=0.0,
            displacement=float(displacements[i]),
            drift=float(drift),
            drift_ratio=float(drift) / floor_height,
            acceleration=0.0,
        )
        for i, drift in enumerate(drifts)
    )


@pytest.fixture
def building() -> BuildingModel:
    """Regular five-story building, 3 m stories, 1000 t."""
    return make_building()


@pytest.fixture
def site() -> SiteInput:
    """Site class SC with Ss = 1.0 g and S1 = 0.4 g."""
    return SiteInput(site_class='SC', ss=1.0, s1=0.4, risk_category='II',
                     latitude=-7.8, longitude=110.4)


@pytest.fixture
def config() -> AnalysisConfig:
    return AnalysisConfig(ground_motion_seed=42)


@pytest.fixture
def profile(site):
    return SeismicParameterResolver().resolve(site)


@pytest.fixture
def spectrum(profile):
    return ResponseSpectrumBuilder().build(profile)


@pytest.fixture
def short_record() -> GroundMotionRecord:
    """Five-sample record with a known double integration."""
    return GroundMotionRecord.from_acceleration(
        id='T1', name='Pulse', acceleration=[0.0, 1.0, -2.0, 1.0, 0.0], timestep=0.1)
