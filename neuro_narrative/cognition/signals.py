"""
Signals — simulated brain waves, the sleep/wake cycle and emotion sampling.

All functions here are pure given their inputs (time, clock, random source).
Brain waves are fixed sinusoids of wall-clock seconds:

  wave     amplitude  offset  period divisor
  alpha    0.5        0.5     10
  beta     0.3        0.7     5
  theta    0.4        0.6     15
  delta    0.6        0.4     20
"""

import math
import random
from datetime import datetime
from typing import Dict, Optional, Tuple

from neuro_narrative.models.cognition import BrainWaves, SleepState

# name -> (amplitude, offset, period divisor)
WAVE_PARAMETERS: Dict[str, Tuple[float, float, float]] = {
    "alpha": (0.5, 0.5, 10),
    "beta": (0.3, 0.7, 5),
    "theta": (0.4, 0.6, 15),
    "delta": (0.6, 0.4, 20),
}

WAKE_START_HOUR = 7
SLEEP_START_HOUR = 23

EMOTIONS = [
    "awe-struck", "curious", "excited", "cautious", "determined",
    "whimsical", "melancholic", "hopeful", "conflicted", "inspired",
]


def _wave(name: str, t: float) -> float:
    amplitude, offset, divisor = WAVE_PARAMETERS[name]
    return math.sin(t / divisor) * amplitude + offset


def alpha(t: float) -> float:
    return _wave("alpha", t)


def beta(t: float) -> float:
    return _wave("beta", t)


def theta(t: float) -> float:
    return _wave("theta", t)


def delta(t: float) -> float:
    return _wave("delta", t)


def brain_waves(t: float) -> BrainWaves:
    """All four signals sampled at the same instant."""
    return BrainWaves(alpha=alpha(t), beta=beta(t), theta=theta(t), delta=delta(t))


def sleep_state(now: Optional[datetime] = None) -> SleepState:
    """Wake during [07:00, 23:00) local time, sleep otherwise."""
    if now is None:
        now = datetime.now()
    if WAKE_START_HOUR <= now.hour < SLEEP_START_HOUR:
        return "wake"
    return "sleep"


def sample_emotion(rng: Optional[random.Random] = None) -> str:
    """Pick an emotion label uniformly at random."""
    return (rng or random).choice(EMOTIONS)
