from __future__ import annotations

from .. import constants as cs
from ..models import GenericType, TypeExpr, UnionType
from .type_algebra import (
    ANY,
    BOOLEAN,
    DATE,
    FUNCTION,
    NULL,
    NUMBER,
    OBJECT,
    REGEXP,
    STRING,
    VOID,
    array_of,
    promise_of,
)

MAP_ANY = GenericType(cs.TYPE_MAP, (ANY, ANY))
SET_ANY = GenericType(cs.TYPE_SET, (ANY,))
ERROR = GenericType("Error")
REGEXP_EXEC_ARRAY = GenericType("RegExpExecArray")

GLOBAL_CALL_TYPES: dict[str, TypeExpr] = {
    "String": STRING,
    "Number": NUMBER,
    "Boolean": BOOLEAN,
    "Array": array_of(ANY),
    "Object": OBJECT,
    "Function": FUNCTION,
    "RegExp": REGEXP,
    "Date": DATE,
    "Promise": promise_of(ANY),
    "Map": MAP_ANY,
    "Set": SET_ANY,
    "parseInt": NUMBER,
    "parseFloat": NUMBER,
    "isNaN": BOOLEAN,
    "isFinite": BOOLEAN,
    "encodeURI": STRING,
    "encodeURIComponent": STRING,
    "decodeURI": STRING,
    "decodeURIComponent": STRING,
    "atob": STRING,
    "btoa": STRING,
    "setTimeout": NUMBER,
    "setInterval": NUMBER,
    "clearTimeout": VOID,
    "clearInterval": VOID,
}

CONSTRUCTOR_TYPES: dict[str, TypeExpr] = {
    "Date": DATE,
    "Error": ERROR,
    "TypeError": GenericType("TypeError"),
    "RangeError": GenericType("RangeError"),
    "SyntaxError": GenericType("SyntaxError"),
    "RegExp": REGEXP,
    "Map": MAP_ANY,
    "Set": SET_ANY,
    "WeakMap": GenericType("WeakMap", (ANY, ANY)),
    "WeakSet": GenericType("WeakSet", (ANY,)),
    "Array": array_of(ANY),
    "Object": OBJECT,
}

STATIC_METHOD_TYPES: dict[tuple[str, str], TypeExpr] = {
    ("Object", "keys"): array_of(STRING),
    ("Object", "values"): array_of(ANY),
    ("Object", "entries"): array_of(array_of(ANY)),
    ("Object", "getOwnPropertyNames"): array_of(STRING),
    ("Object", "assign"): OBJECT,
    ("Object", "create"): OBJECT,
    ("Object", "freeze"): OBJECT,
    ("Object", "seal"): OBJECT,
    ("Object", "fromEntries"): OBJECT,
    ("Object", "is"): BOOLEAN,
    ("Object", "isFrozen"): BOOLEAN,
    ("Object", "isSealed"): BOOLEAN,
    ("Array", "isArray"): BOOLEAN,
    ("Array", "from"): array_of(ANY),
    ("Array", "of"): array_of(ANY),
    ("JSON", "stringify"): STRING,
    ("Number", "isInteger"): BOOLEAN,
    ("Number", "isSafeInteger"): BOOLEAN,
    ("Number", "isNaN"): BOOLEAN,
    ("Number", "isFinite"): BOOLEAN,
    ("Number", "parseInt"): NUMBER,
    ("Number", "parseFloat"): NUMBER,
    ("String", "fromCharCode"): STRING,
    ("String", "fromCodePoint"): STRING,
    ("String", "raw"): STRING,
    ("Date", "now"): NUMBER,
    ("Date", "parse"): NUMBER,
    ("Date", "UTC"): NUMBER,
    ("Promise", "all"): promise_of(array_of(ANY)),
    ("Promise", "allSettled"): promise_of(array_of(ANY)),
    ("Promise", "race"): promise_of(ANY),
    ("Promise", "any"): promise_of(ANY),
    ("Promise", "reject"): promise_of(ANY),
}

# (H) Every Math method returns a number
NUMERIC_NAMESPACES = frozenset({"Math"})
PROMISE_RESOLVE = ("Promise", "resolve")

STATIC_PROPERTY_TYPES: dict[tuple[str, str], TypeExpr] = {
    ("Math", "PI"): NUMBER,
    ("Math", "E"): NUMBER,
    ("Math", "LN2"): NUMBER,
    ("Math", "LN10"): NUMBER,
    ("Math", "SQRT2"): NUMBER,
    ("Number", "MAX_SAFE_INTEGER"): NUMBER,
    ("Number", "MIN_SAFE_INTEGER"): NUMBER,
    ("Number", "MAX_VALUE"): NUMBER,
    ("Number", "MIN_VALUE"): NUMBER,
    ("Number", "EPSILON"): NUMBER,
    ("Number", "NaN"): NUMBER,
    ("Number", "POSITIVE_INFINITY"): NUMBER,
    ("Number", "NEGATIVE_INFINITY"): NUMBER,
}

STRING_METHOD_RETURNS: dict[str, TypeExpr] = {
    "split": array_of(STRING),
    "indexOf": NUMBER,
    "lastIndexOf": NUMBER,
    "search": NUMBER,
    "charCodeAt": NUMBER,
    "codePointAt": NUMBER,
    "localeCompare": NUMBER,
    "includes": BOOLEAN,
    "startsWith": BOOLEAN,
    "endsWith": BOOLEAN,
    "match": UnionType((array_of(STRING), NULL)),
    "matchAll": array_of(array_of(STRING)),
}

ARRAY_SELF_METHODS = frozenset(
    {
        "filter",
        "slice",
        "concat",
        "sort",
        "reverse",
        "toSorted",
        "toReversed",
        "splice",
        "fill",
        "copyWithin",
    }
)
ARRAY_NUMBER_METHODS = frozenset(
    {"indexOf", "lastIndexOf", "findIndex", "findLastIndex", "push", "unshift"}
)
ARRAY_BOOLEAN_METHODS = frozenset({"every", "some", "includes"})
ARRAY_ELEMENT_OR_UNDEFINED_METHODS = frozenset(
    {"pop", "shift", "find", "findLast", "at"}
)
ARRAY_STRING_METHODS = frozenset({"join", "toString", "toLocaleString"})
ARRAY_VOID_METHODS = frozenset({"forEach"})

NUMBER_METHOD_RETURNS: dict[str, TypeExpr] = {
    "toFixed": STRING,
    "toPrecision": STRING,
    "toExponential": STRING,
    "toString": STRING,
    "toLocaleString": STRING,
    "valueOf": NUMBER,
}

GENERIC_METHOD_RETURNS: dict[str, dict[str, TypeExpr]] = {
    cs.TYPE_REGEXP: {
        "test": BOOLEAN,
        "toString": STRING,
    },
    cs.TYPE_MAP: {
        "get": ANY,
        "has": BOOLEAN,
        "delete": BOOLEAN,
        "set": MAP_ANY,
        "clear": VOID,
        "forEach": VOID,
        "keys": array_of(ANY),
        "values": array_of(ANY),
    },
    cs.TYPE_SET: {
        "has": BOOLEAN,
        "delete": BOOLEAN,
        "add": SET_ANY,
        "clear": VOID,
        "forEach": VOID,
        "values": array_of(ANY),
    },
    cs.TYPE_DATE: {
        "toISOString": STRING,
        "toJSON": STRING,
        "toString": STRING,
        "toDateString": STRING,
        "toTimeString": STRING,
        "toLocaleString": STRING,
        "toLocaleDateString": STRING,
        "toLocaleTimeString": STRING,
        "toUTCString": STRING,
        "valueOf": NUMBER,
    },
    cs.TYPE_PROMISE: {
        "then": promise_of(ANY),
        "catch": promise_of(ANY),
        "finally": promise_of(ANY),
    },
}
REGEXP_EXEC_METHOD = "exec"
DATE_GETTER_PREFIX = "get"
DATE_SETTER_PREFIX = "set"

PROPERTY_TYPES: dict[str, dict[str, TypeExpr]] = {
    cs.TYPE_REGEXP: {
        "source": STRING,
        "flags": STRING,
        "global": BOOLEAN,
        "ignoreCase": BOOLEAN,
        "multiline": BOOLEAN,
        "lastIndex": NUMBER,
    },
    cs.TYPE_MAP: {cs.PROPERTY_SIZE: NUMBER},
    cs.TYPE_SET: {cs.PROPERTY_SIZE: NUMBER},
    "Error": {"message": STRING, "name": STRING, "stack": STRING},
}
