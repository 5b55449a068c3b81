"""Evaluations: advisory reports on suggestion quality."""

from src.evaluations.tld_distribution_eval import evaluate_tld_distribution

__all__ = ["evaluate_tld_distribution"]
