"""
resume_optimizer package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import ResumeOptimizerConfig, config_from_dict, config_from_yaml, load_config
from .errors import InputError
from .ngrams import extract_ngrams, generate_ngrams
from .pipeline import analyze_document, optimize_text
from .rewriting import (
    apply_enhancement,
    apply_keyword_highlighting,
    apply_metric_highlighting,
    enhance,
)
from .scoring import score

__all__ = [
    "ResumeOptimizerConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "InputError",
    "extract_ngrams",
    "generate_ngrams",
    "apply_keyword_highlighting",
    "apply_enhancement",
    "apply_metric_highlighting",
    "enhance",
    "score",
    "analyze_document",
    "optimize_text",
]

__version__ = "0.1.0"
