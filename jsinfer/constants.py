from enum import StrEnum


class SupportedLanguage(StrEnum):
    JS = "javascript"


class TreeSitterModule(StrEnum):
    JS = "tree_sitter_javascript"


QUERY_LANGUAGE = "language"
ENCODING_UTF8 = "utf-8"


class Primitive(StrEnum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    OBJECT = "object"
    VOID = "void"


class UsageTag(StrEnum):
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    BOOLEAN = "boolean"
    NUMBER_OR_STRING = "number|string"


# (H) Type expression rendering
TYPE_ANY = "any"
TYPE_FUNCTION = "Function"
TYPE_PROMISE = "Promise"
TYPE_REGEXP = "RegExp"
TYPE_MAP = "Map"
TYPE_SET = "Set"
TYPE_DATE = "Date"
ARRAY_SUFFIX = "[]"
UNION_SEPARATOR = " | "
PARAM_SEPARATOR = ", "
ARROW = " => "
REST_PREFIX = "..."
SHAPE_OPEN = "{ "
SHAPE_CLOSE = " }"
SHAPE_EMPTY = "{}"
SHAPE_FIELD_SEPARATOR = ": "
SERIALIZE_ENTRY_SEPARATOR = ";"
SERIALIZE_FIELD_SEPARATOR = ":"
SERIALIZE_CONFIDENCE_FORMAT = "{:.6f}"

# (H) Union constructor limits
MAX_UNION_MEMBERS = 4

# (H) Confidence levels
CONFIDENCE_CERTAIN = 1.0
CONFIDENCE_FLOOR = 0.0
CONFIDENCE_UNKNOWN = 0.1
CONFIDENCE_UNKNOWN_CALL = 0.3
CONFIDENCE_ARRAY_HOMOGENEOUS = 0.9
CONFIDENCE_ARRAY_EMPTY = 0.7
CONFIDENCE_ARRAY_MIXED = 0.8
CONFIDENCE_ARRAY_ELEMENT_MIN = 0.7
CONFIDENCE_OBJECT_LITERAL = 0.8
CONFIDENCE_FUNCTION_LITERAL = 0.9
CONFIDENCE_FUNCTION_EXPRESSION = 0.8
CONFIDENCE_FUNCTION_DECLARATION = 0.7
CONFIDENCE_FUNCTION_MIN = 0.6
CONFIDENCE_KNOWN_CALL = 0.8
CONFIDENCE_KNOWN_CONSTRUCTOR = 0.9
CONFIDENCE_OBJECT_FALLBACK = 0.5
CONFIDENCE_UNKNOWN_CONSTRUCTOR = 0.7
CONFIDENCE_STATIC_METHOD = 0.9
CONFIDENCE_METHOD_RETURN = 0.9
CONFIDENCE_REST_PARAM = 0.8
CONFIDENCE_OPERATOR = 0.9
CONFIDENCE_PLUS_AMBIGUOUS = 0.3
CONFIDENCE_VOID_RETURN = 0.5
CONFIDENCE_EXECUTOR_DEFAULT = 0.5
CONFIDENCE_PROMISE_MIN = 0.7
CONFIDENCE_PROMISE_FALLBACK = 0.6
CONFIDENCE_UNION_MIN_BRANCH = 0.7
CONFIDENCE_UNION_MIN = 0.7
CONFIDENCE_UNION_COLLAPSED = 0.3
CONFIDENCE_USAGE = 0.8
CONFIDENCE_USAGE_NUMERIC_PLUS = 0.7
CONFIDENCE_USAGE_AMBIGUOUS = 0.5
CONFIDENCE_USAGE_CEILING = 0.95
CONFIDENCE_RESOLVED_FUNCTION = 0.9
CONFIDENCE_SIGNATURE_MAX = 0.95

# (H) Confidence decay factors
DECAY_ASSIGNMENT = 0.9
DECAY_AWAIT = 0.95
DECAY_UNION = 0.9
DECAY_UNION_SAME = 0.95
DECAY_PROMISE_RESOLVE = 0.9
DECAY_CALLBACK_PARAM = 0.9
DECAY_CALL_RETURN = 0.9

# (H) Budgets
DEFAULT_MAX_DEPTH = 8
DEFAULT_MAX_TIME_MS = 5000
DEFAULT_MAX_ITERATIONS = 5
MS_PER_SECOND = 1000
MAX_EXPRESSION_NESTING = 100

# (H) Tree-sitter JavaScript node types
TS_PROGRAM = "program"
TS_IDENTIFIER = "identifier"
TS_PROPERTY_IDENTIFIER = "property_identifier"
TS_SHORTHAND_PROPERTY_IDENTIFIER = "shorthand_property_identifier"
TS_SHORTHAND_PROPERTY_IDENTIFIER_PATTERN = "shorthand_property_identifier_pattern"
TS_VARIABLE_DECLARATOR = "variable_declarator"
TS_FUNCTION_DECLARATION = "function_declaration"
TS_GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
TS_FUNCTION_EXPRESSION = "function_expression"
TS_FUNCTION_LEGACY = "function"
TS_GENERATOR_FUNCTION = "generator_function"
TS_ARROW_FUNCTION = "arrow_function"
TS_METHOD_DEFINITION = "method_definition"
TS_CLASS_DECLARATION = "class_declaration"
TS_FORMAL_PARAMETERS = "formal_parameters"
TS_ASSIGNMENT_PATTERN = "assignment_pattern"
TS_OBJECT_ASSIGNMENT_PATTERN = "object_assignment_pattern"
TS_REST_PATTERN = "rest_pattern"
TS_OBJECT_PATTERN = "object_pattern"
TS_ARRAY_PATTERN = "array_pattern"
TS_PAIR_PATTERN = "pair_pattern"
TS_STATEMENT_BLOCK = "statement_block"
TS_RETURN_STATEMENT = "return_statement"
TS_CALL_EXPRESSION = "call_expression"
TS_NEW_EXPRESSION = "new_expression"
TS_MEMBER_EXPRESSION = "member_expression"
TS_SUBSCRIPT_EXPRESSION = "subscript_expression"
TS_OPTIONAL_CHAIN = "optional_chain"
TS_ARGUMENTS = "arguments"
TS_AWAIT_EXPRESSION = "await_expression"
TS_BINARY_EXPRESSION = "binary_expression"
TS_UNARY_EXPRESSION = "unary_expression"
TS_UPDATE_EXPRESSION = "update_expression"
TS_TERNARY_EXPRESSION = "ternary_expression"
TS_PARENTHESIZED_EXPRESSION = "parenthesized_expression"
TS_SEQUENCE_EXPRESSION = "sequence_expression"
TS_ASSIGNMENT_EXPRESSION = "assignment_expression"
TS_AUGMENTED_ASSIGNMENT_EXPRESSION = "augmented_assignment_expression"
TS_SPREAD_ELEMENT = "spread_element"
TS_ARRAY = "array"
TS_OBJECT = "object"
TS_PAIR = "pair"
TS_STRING = "string"
TS_TEMPLATE_STRING = "template_string"
TS_NUMBER = "number"
TS_REGEX = "regex"
TS_TRUE = "true"
TS_FALSE = "false"
TS_NULL = "null"
TS_UNDEFINED = "undefined"
TS_ASYNC = "async"
TS_COMMENT = "comment"

# (H) Tree-sitter field names
FIELD_NAME = "name"
FIELD_VALUE = "value"
FIELD_KEY = "key"
FIELD_BODY = "body"
FIELD_PARAMETERS = "parameters"
FIELD_PARAMETER = "parameter"
FIELD_LEFT = "left"
FIELD_RIGHT = "right"
FIELD_OPERATOR = "operator"
FIELD_FUNCTION = "function"
FIELD_ARGUMENTS = "arguments"
FIELD_OBJECT = "object"
FIELD_PROPERTY = "property"
FIELD_INDEX = "index"
FIELD_CONSTRUCTOR = "constructor"
FIELD_CONSEQUENCE = "consequence"
FIELD_ALTERNATIVE = "alternative"

UNDEFINED_IDENTIFIER = "undefined"

# (H) Node groups
FUNCTION_LITERAL_NODES = frozenset(
    {
        TS_FUNCTION_EXPRESSION,
        TS_FUNCTION_LEGACY,
        TS_GENERATOR_FUNCTION,
        TS_ARROW_FUNCTION,
    }
)
NAMED_FUNCTION_NODES = frozenset(
    {TS_FUNCTION_DECLARATION, TS_GENERATOR_FUNCTION_DECLARATION}
)
FUNCTION_BOUNDARY_NODES = frozenset(
    FUNCTION_LITERAL_NODES
    | NAMED_FUNCTION_NODES
    | {TS_METHOD_DEFINITION, TS_CLASS_DECLARATION}
)
DESTRUCTURING_PATTERN_NODES = frozenset({TS_OBJECT_PATTERN, TS_ARRAY_PATTERN})
STRING_LITERAL_NODES = frozenset({TS_STRING, TS_TEMPLATE_STRING})
BOOLEAN_LITERAL_NODES = frozenset({TS_TRUE, TS_FALSE})
LITERAL_NODES = frozenset(
    STRING_LITERAL_NODES
    | BOOLEAN_LITERAL_NODES
    | {TS_NUMBER, TS_NULL, TS_UNDEFINED, TS_REGEX}
)

# (H) Operators
ARITHMETIC_OPERATORS = frozenset({"-", "*", "/", "%", "**"})
USAGE_ARITHMETIC_OPERATORS = frozenset(ARITHMETIC_OPERATORS | {"+"})
BITWISE_OPERATORS = frozenset({"&", "|", "^", "<<", ">>", ">>>"})
NUMERIC_OPERATORS = frozenset(ARITHMETIC_OPERATORS | BITWISE_OPERATORS)
COMPARISON_OPERATORS = frozenset({"==", "===", "!=", "!==", ">", "<", ">=", "<="})
RELATIONAL_OPERATORS = frozenset({"in", "instanceof"})
BOOLEAN_OPERATORS = frozenset(COMPARISON_OPERATORS | RELATIONAL_OPERATORS)
LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})
OP_PLUS = "+"
OP_NOT = "!"
OP_TYPEOF = "typeof"
OP_VOID = "void"
OP_DELETE = "delete"
NUMERIC_UNARY_OPERATORS = frozenset({"+", "-", "~"})

# (H) Usage evidence method names; the two sets are disjoint
STRING_METHODS = frozenset(
    {
        "charAt",
        "charCodeAt",
        "codePointAt",
        "endsWith",
        "localeCompare",
        "match",
        "matchAll",
        "normalize",
        "padEnd",
        "padStart",
        "repeat",
        "replace",
        "replaceAll",
        "search",
        "split",
        "startsWith",
        "substr",
        "substring",
        "toLowerCase",
        "toUpperCase",
        "trim",
        "trimEnd",
        "trimStart",
    }
)
ARRAY_METHODS = frozenset(
    {
        "every",
        "fill",
        "filter",
        "find",
        "findIndex",
        "findLast",
        "findLastIndex",
        "flat",
        "flatMap",
        "forEach",
        "join",
        "map",
        "pop",
        "push",
        "reduce",
        "reduceRight",
        "reverse",
        "shift",
        "some",
        "sort",
        "splice",
        "unshift",
    }
)

# (H) Array methods whose first argument is an element callback
ELEMENT_CALLBACK_METHODS = frozenset(
    {
        "every",
        "filter",
        "find",
        "findIndex",
        "findLast",
        "findLastIndex",
        "flatMap",
        "forEach",
        "map",
        "some",
    }
)
REDUCE_METHODS = frozenset({"reduce", "reduceRight"})
SORT_METHODS = frozenset({"sort", "toSorted"})
MAP_METHOD = "map"
FLAT_MAP_METHOD = "flatMap"
FLAT_METHOD = "flat"
RESOLVE_PARAM_INDEX = 0

# (H) Property names
PROPERTY_LENGTH = "length"
PROPERTY_SIZE = "size"

