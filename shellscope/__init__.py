"""Explains what a pasted shell command would do before anyone runs it."""

from shellscope.detector import Classifier, CommandAnalysis, build_classifier, classify

__all__ = ["Classifier", "CommandAnalysis", "build_classifier", "classify"]
