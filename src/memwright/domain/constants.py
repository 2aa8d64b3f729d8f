"""Centralized constants for memwright.

Algorithm identifiers and preset values live here so every layer
imports from a single source of truth.
"""

# ---------- Algorithm identifiers ----------
ALGORITHM_SM2 = "sm2"
ALGORITHM_FSRS = "fsrs"  # reserved, no scheduler registered
DEFAULT_ALGORITHM = ALGORITHM_SM2

# ---------- SM2 standard preset ----------
SM2_STANDARD_INITIAL_EASE = 2.5
SM2_STANDARD_MIN_EASE = 1.3
SM2_STANDARD_MAX_EASE = 3.0
SM2_STANDARD_EASE_DECREMENT = 0.2
SM2_STANDARD_EASE_INCREMENT = 0.15
SM2_STANDARD_EASY_BONUS = 1.3
SM2_STANDARD_GRADUATING_INTERVAL = 1  # days
SM2_STANDARD_MASTERED_THRESHOLD = 21  # days
