"""Ordered catalog of the post-selection analysis stages."""

from __future__ import annotations

from typing import Tuple

from farmplot.models import AnalysisStep

ANALYSIS_STEPS: Tuple[AnalysisStep, ...] = (
    AnalysisStep(title="Analyzing Farm Land", icon="leaf-outline", color="#10B981"),
    AnalysisStep(
        title="Analyzing Soil Conditions", icon="earth-outline", color="#8B4513"
    ),
    AnalysisStep(
        title="Fetching Nearby Mandi Prices",
        icon="trending-up-outline",
        color="#F59E0B",
    ),
    AnalysisStep(
        title="Getting Latest Weather Updates",
        icon="partly-sunny-outline",
        color="#3B82F6",
    ),
    AnalysisStep(
        title="Finalizing Personalized Insights",
        icon="analytics-outline",
        color="#8B5CF6",
    ),
)
