# (H) Parser errors
JS_GRAMMAR_UNAVAILABLE = (
    "Tree-sitter JavaScript grammar is not available. "
    "Install it with: pip install tree-sitter-javascript"
)
INVALID_TREE = "Expected a tree-sitter Tree or Node, got {kind}"

# (H) Configuration errors
MAX_DEPTH_POSITIVE = "max_depth must be a positive integer"
MAX_TIME_NON_NEGATIVE = "max_time must be a non-negative number of milliseconds"
MAX_ITERATIONS_POSITIVE = "max_iterations must be a positive integer"
