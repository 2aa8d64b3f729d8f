"""memwright: spaced-repetition scheduling engine."""

from memwright.consts import VERSION

__version__ = VERSION
