"""
Duration parsing for scene scheduling.

A storyboard duration ("2분", "1.5 min", "3") is read as on-screen minutes,
then scaled into shooting minutes (on-screen x shooting ratio) and the
rehearsal minutes charged before each scene.
"""

import math
import re

import structlog

logger = structlog.get_logger()

# "2분", "1.5 분", "3min", "4 minutes"
DURATION_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:분|min(?:ute)?s?\b)", re.IGNORECASE)

# A bare number ("3", "2.5") is read as minutes
BARE_NUMBER_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*$")


def parse_on_screen_minutes(text: str | float | int | None, fallback: float) -> float:
    """
    Parse a free-text on-screen duration into minutes.

    Args:
        text: Duration as written on the storyboard (e.g. "2분", "1.5분")
        fallback: Minutes to use when no positive duration can be read

    Returns:
        On-screen minutes (always positive and finite)
    """
    if isinstance(text, bool) or text is None:
        return fallback

    if isinstance(text, (int, float)):
        minutes = float(text)
    else:
        match = DURATION_PATTERN.search(text) or BARE_NUMBER_PATTERN.match(text)
        if not match:
            if text:
                logger.debug("Unparseable duration, using fallback", text=text, fallback=fallback)
            return fallback
        minutes = float(match.group(1))

    if not math.isfinite(minutes) or minutes <= 0:
        return fallback
    return minutes


def to_shooting_minutes(on_screen_minutes: float, ratio: float) -> int:
    """Convert on-screen minutes to real shooting minutes (at least one minute)."""
    return max(1, round(on_screen_minutes * ratio))


def rehearsal_minutes(shooting_minutes: int, ratio: float) -> int:
    """Rehearsal share charged for a scene, rounded up to whole minutes."""
    # 15 * 0.2 == 3.0000000000000004, so round away float noise before ceil
    return math.ceil(round(shooting_minutes * ratio, 6))
