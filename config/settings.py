"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError on a bad threshold or polarity
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Data ────────────────────────────────────────────────────────────────
    dataset_path: str = field(
        default_factory=lambda: os.environ.get("DATASET_PATH", "")
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5000"))
    )

    # ── Ranking ─────────────────────────────────────────────────────────────
    top_n: int = field(
        default_factory=lambda: int(os.environ.get("TOP_N", "5"))
    )

    # ── Classification ──────────────────────────────────────────────────────
    high_demand_threshold: int = field(
        default_factory=lambda: int(os.environ.get("HIGH_DEMAND_THRESHOLD", "100"))
    )
    untapped_threshold: int = field(
        default_factory=lambda: int(os.environ.get("UNTAPPED_THRESHOLD", "50"))
    )
    #: ``below`` keeps trending topics under the threshold, ``above`` over it.
    high_demand_polarity: str = field(
        default_factory=lambda: os.environ.get("HIGH_DEMAND_POLARITY", "below")
    )

    # ── Graph titles ────────────────────────────────────────────────────────
    social_graph_title: str = field(
        default_factory=lambda: os.environ.get("SOCIAL_GRAPH_TITLE", "Social Media Trends")
    )
    engagement_graph_title: str = field(
        default_factory=lambda: os.environ.get(
            "ENGAGEMENT_GRAPH_TITLE", "Trending Conversations"
        )
    )
    newsroom_graph_title: str = field(
        default_factory=lambda: os.environ.get(
            "NEWSROOM_GRAPH_TITLE", "News Topic Counts of Articles"
        )
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if any setting is out of range."""
        if self.high_demand_polarity.strip().lower() not in ("below", "above"):
            raise ValueError(
                f"HIGH_DEMAND_POLARITY must be 'below' or 'above', "
                f"got {self.high_demand_polarity!r}."
            )
        if self.top_n <= 0:
            raise ValueError(f"TOP_N must be positive, got {self.top_n}.")
        if self.high_demand_threshold < 0 or self.untapped_threshold < 0:
            raise ValueError("Classification thresholds must not be negative.")
