"""Detector module for classifying pasted shell commands.

Public API:
    classify(command) -> CommandAnalysis
    Classifier(registry, fetcher).classify(command) -> CommandAnalysis
"""

from shellscope.detector.orchestrator import Classifier, build_classifier, classify
from shellscope.detector.registry import Registry, RegistryError, default_registry, load_registry
from shellscope.detector.types import CommandAnalysis, PackageInfo

__all__ = [
    "Classifier",
    "CommandAnalysis",
    "PackageInfo",
    "Registry",
    "RegistryError",
    "build_classifier",
    "classify",
    "default_registry",
    "load_registry",
]
