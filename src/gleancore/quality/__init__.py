"""Content quality assessment."""

from __future__ import annotations

from .assessor import QualityAssessment, QualityAssessor, QualityLevel

__all__ = ["QualityAssessment", "QualityAssessor", "QualityLevel"]
