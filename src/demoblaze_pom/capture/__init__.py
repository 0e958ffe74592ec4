"""Capture module for reading scenario failure artifacts."""

from .artifacts import FailureArtifacts

__all__ = ["FailureArtifacts"]
