"""Candidate acquisition pipeline."""

from token_sniper.services.pipeline.candidate_pipeline import CandidatePipeline

__all__ = ["CandidatePipeline"]
