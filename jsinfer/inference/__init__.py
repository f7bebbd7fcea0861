from .call_graph import CallGraphBuilder
from .context import InferenceContext
from .engine import TypeInferenceEngine, infer_types
from .type_collector import TypeCollector
from .type_resolver import TypeResolver
from .usage_analyzer import UsageAnalyzer

__all__ = [
    "CallGraphBuilder",
    "InferenceContext",
    "TypeCollector",
    "TypeInferenceEngine",
    "TypeResolver",
    "UsageAnalyzer",
    "infer_types",
]
