from __future__ import annotations

# (H) Parser loader logs
IMPORTING_MODULE = "Attempting to import module: {module}"
LIB_NOT_AVAILABLE = "Tree-sitter library for {lang} not available."
GRAMMAR_LOADED = "Successfully loaded {lang} grammar."
GRAMMAR_LOAD_FAILED = "Failed to load {lang} grammar: {error}"

# (H) Engine logs
ENGINE_START = "--- Type inference: max_depth={max_depth}, max_time={max_time}ms ---"
ENGINE_ROUND = "--- Resolver round {round}: {entries} tracked names ---"
ENGINE_FIXPOINT = "Type map converged after {rounds} round(s)"
ENGINE_ITERATION_CAP = "Type map did not converge within {rounds} round(s)"
ENGINE_DONE = "Inferred {count} types in {elapsed:.1f}ms"

# (H) Collector logs
COLLECTOR_SEEDED = "Seeded {name} -> {type_name} @{confidence:.2f}"
COLLECTOR_DONE = "Collected {count} initial types"

# (H) Call graph logs
CALL_GRAPH_FUNCTION = "Found function {name} with {count} parameter(s)"
CALL_GRAPH_CALL_SITE = "Call site {callee} from {caller}"
CALL_GRAPH_DONE = "Built call graph with {functions} functions and {calls} call sites"

# (H) Usage analyzer logs
USAGE_EVIDENCE = "Usage evidence for {name}: {tag}"
USAGE_DONE = "Recorded usage evidence for {count} names"

# (H) Resolver logs
RESOLVER_PROPAGATED = "Propagated {name} -> {type_name} @{confidence:.2f}"
RESOLVER_PARAM_REFINED = (
    "Parameter {param} of {function} -> {type_name} @{confidence:.2f}"
)
RESOLVER_RETURN_INFERRED = "Return type of {function} -> {type_name}"
RESOLVER_SIGNATURE = "Signature of {function} -> {type_name}"
RESOLVER_USAGE_FOLDED = "Usage evidence folded {name} -> {type_name}"
RESOLVER_CALLBACK_PARAM = "Callback parameter {param} -> {type_name}"
RESOLVER_CYCLE = "Cycle detected at {function}; leaving it unresolved"
RESOLVER_DEPTH_EXCEEDED = "Depth budget {max_depth} exceeded; using structural type"
EXPRESSION_NESTING_EXCEEDED = (
    "Expression nesting limit {limit} reached; typing as any"
)
RESOLVER_DEADLINE = "Time budget of {max_time}ms exhausted after {elapsed:.1f}ms"
