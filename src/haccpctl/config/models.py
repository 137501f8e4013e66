"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, haccpctl.toml only contains
overrides. A fresh workspace needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from haccpctl.domain.aggregate import DEFAULT_DUE_SOON_DAYS, DEFAULT_MAX_GROUPS, DEFAULT_WINDOW_DAYS
from haccpctl.domain.report import DEFAULT_TITLE
from haccpctl.domain.scoring import DEFAULT_WEIGHTS, DUE_SOON_PERCENT, MAX_SCORE
from haccpctl.domain.types import DomainKind

# --- haccpctl.toml sections ---


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    tenant: str = "default"


class ScoringConfig(BaseModel):
    """[scoring] section."""

    model_config = {"frozen": True}

    weights: dict[DomainKind, int] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    due_soon_percent: int = Field(default=DUE_SOON_PERCENT, ge=0, le=100)
    window_days: int = Field(default=1, ge=1)

    @field_validator("weights")
    @classmethod
    def _weights_sum_to_max(cls, value: dict[DomainKind, int]) -> dict[DomainKind, int]:
        merged = {**DEFAULT_WEIGHTS, **value}
        if any(w < 0 for w in merged.values()):
            msg = "scoring weights must be non-negative"
            raise ValueError(msg)
        if sum(merged.values()) != MAX_SCORE:
            msg = f"scoring weights must sum to {MAX_SCORE}, got {sum(merged.values())}"
            raise ValueError(msg)
        return merged


class ReviewConfig(BaseModel):
    """[review] section."""

    model_config = {"frozen": True}

    window_days: int = Field(default=DEFAULT_WINDOW_DAYS, ge=1)
    max_repeat_groups: int = Field(default=DEFAULT_MAX_GROUPS, ge=8, le=10)
    due_soon_days: int = Field(default=DEFAULT_DUE_SOON_DAYS, ge=0)
    eligibility_days: int = Field(default=28, ge=0)
    title: str = DEFAULT_TITLE


class EvidenceConfig(BaseModel):
    """[evidence] section."""

    model_config = {"frozen": True}

    path: str = "evidence.json"


class WatchConfig(BaseModel):
    """[watch] section."""

    model_config = {"frozen": True}

    interval_seconds: float = Field(default=90.0, gt=0)


class HaccpConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    review: ReviewConfig = Field(default_factory=ReviewConfig)
    evidence: EvidenceConfig = Field(default_factory=EvidenceConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
