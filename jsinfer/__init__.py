from .config import InferenceConfig, settings
from .inference import (
    CallGraphBuilder,
    TypeCollector,
    TypeInferenceEngine,
    TypeResolver,
    UsageAnalyzer,
    infer_types,
)
from .inference.type_algebra import render_shape, serialize_type_map
from .models import CallGraphResult, CallSite, FunctionInfo, InferredType

__all__ = [
    "CallGraphBuilder",
    "CallGraphResult",
    "CallSite",
    "FunctionInfo",
    "InferenceConfig",
    "InferredType",
    "TypeCollector",
    "TypeInferenceEngine",
    "TypeResolver",
    "UsageAnalyzer",
    "infer_types",
    "render_shape",
    "serialize_type_map",
    "settings",
]
