"""Symbol and dependency manifest extraction for JavaScript/TypeScript projects."""

from .analyzers import SourceParser, SymbolExtractor
from .manifest_builder import ManifestBuilder
from .models import ProjectManifest
from .optimizers import intern_strings, resolve_string_refs, simplify_for_llm
from .orchestrator import Orchestrator

__all__ = [
    "ManifestBuilder",
    "Orchestrator",
    "ProjectManifest",
    "SourceParser",
    "SymbolExtractor",
    "intern_strings",
    "resolve_string_refs",
    "simplify_for_llm",
]
