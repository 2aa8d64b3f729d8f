"""Per-deck scheduling options, one optional section per algorithm family."""

from pydantic import BaseModel, ConfigDict

from .sm2 import SM2Config


class SRSOptions(BaseModel):
    """
    Structured options object stored with a deck.

    Each algorithm family owns one optional section; a missing section means
    the deck defers to the caller's fallback.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sm2: SM2Config | None = None

    @property
    def is_empty(self) -> bool:
        return self.sm2 is None

    def merged(self, fallback: "SRSOptions | None") -> "SRSOptions":
        """Fill sections this deck does not set from `fallback`."""
        if fallback is None:
            return self
        return SRSOptions(sm2=self.sm2 if self.sm2 is not None else fallback.sm2)
