"""
Testing module for the schedule optimizer.

Contains sample inputs and pytest modules for each scheduling stage and the API.
"""

from testing.sample_inputs import (
    SAMPLE_PROJECT_ID,
    get_sample_resolutions,
    get_sample_scenes,
    make_enriched,
)

__all__ = [
    "SAMPLE_PROJECT_ID",
    "get_sample_resolutions",
    "get_sample_scenes",
    "make_enriched",
]
