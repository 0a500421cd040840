"""Tests for the plist formatter."""

import pytest
from pydantic import ValidationError

from scripts.pbxplist import (
    CustomComments,
    DepthExceeded,
    GenerateComments,
    PlistDictionary,
    PlistDocument,
    PlistFormatter,
    PlistNull,
    PlistString,
    SerializeOptions,
    StripComments,
    build,
    from_python,
    serialize,
    stringify,
)
from scripts.pbxplist.formatter import quote_string


def fmt(value, level: int = 0, **options) -> str:
    formatter = PlistFormatter(options=SerializeOptions(**options), enable_logger=False)
    return formatter.format_value(from_python(value), level)


BASIC = {
    "archiveVersion": 1,
    "objectVersion": 56,
    "objects": {},
    "rootObject": "ABC123",
}


# ---------------------------------------------------------------------------
# quote_string
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text", ["PBXGroup", "_private", "main.swift", "Sample/Info.plist", "a$b", "a-b"])
def test_quote_string_bare(text):
    assert quote_string(text) == text

@pytest.mark.parametrize(
    "text, expected",
    [
        ("", '""'),
        ("two words", '"two words"'),
        ("<group>", '"<group>"'),
        ("42", '"42"'),
        ("-flag", '"-flag"'),
        ("$(inherited)", '"$(inherited)"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("back\\slash", '"back\\\\slash"'),
    ],
)
def test_quote_string_quoted(text, expected):
    assert quote_string(text) == expected


# ---------------------------------------------------------------------------
# format_value
# ---------------------------------------------------------------------------

def test_format_null():
    assert fmt(None) == "null"
    assert PlistFormatter(enable_logger=False).format_value(PlistNull()) == "null"

def test_format_numbers():
    assert fmt(42) == "42"
    assert fmt(42.0) == "42"
    assert fmt(-1.5) == "-1.5"
    assert fmt(1e-7) == "0.0000001"
    assert fmt(1e22) == "10000000000000000000000"

def test_format_empty_containers():
    assert fmt([]) == "()"
    assert fmt({}) == "{}"

def test_format_flat_array_on_one_line():
    assert fmt(["a", "b", "c"]) == "(a, b, c)"

def test_format_array_of_numbers_and_quoted():
    assert fmt([1, "two words", 3.5]) == '(1, "two words", 3.5)'

def test_format_array_with_dictionary_is_multiline():
    assert fmt([{"a": 1}, "x"]) == "(\n  {\n    a = 1;\n  },\n  x\n)"

def test_format_array_with_nested_multi_element_array():
    assert fmt([["a", "b"], ["c"]]) == "(\n  (a, b),\n  (c)\n)"

def test_format_array_with_single_element_arrays_stays_inline():
    assert fmt([["a"], [], "b"]) == "((a), (), b)"

def test_format_array_with_empty_dictionary_is_multiline():
    assert fmt([{}]) == "(\n  {}\n)"

def test_format_nested_multiline_array():
    assert fmt([[{"k": "v"}]]) == "(\n  (\n    {\n      k = v;\n    }\n  )\n)"

def test_format_dictionary():
    assert fmt({"isa": "PBXGroup", "children": ["A", "B"]}) == "{\n  isa = PBXGroup;\n  children = (A, B);\n}"

def test_format_dictionary_indent_level():
    assert fmt({"a": 1}, level=2) == "{\n      a = 1;\n    }"

def test_format_dictionary_quotes_keys():
    assert fmt({"key with space": 1}) == '{\n  "key with space" = 1;\n}'

def test_format_custom_indent():
    assert fmt({"a": {"b": 1}}, indent="\t") == "{\n\ta = {\n\t\tb = 1;\n\t};\n}"


# ---------------------------------------------------------------------------
# format_document / serialize
# ---------------------------------------------------------------------------

def test_serialize_basic_document():
    assert serialize(BASIC) == (
        "archiveVersion = 1;\n"
        "objectVersion = 56;\n"
        "objects = {\n"
        "};\n"
        "rootObject = ABC123;"
    )

def test_serialize_objects():
    doc = dict(BASIC, objects={"ABC123": {"isa": "PBXFileReference", "path": "AppDelegate.swift"}})
    result = serialize(doc)
    assert "  ABC123 = {\n    isa = PBXFileReference;\n    path = AppDelegate.swift;\n  };" in result

def test_serialize_strip_has_no_comments():
    doc = dict(BASIC, objects={"ABC123": {"isa": "PBXFileReference", "path": "AppDelegate.swift"}})
    result = serialize(doc, {"comment_strategy": "strip"})
    assert "/*" not in result
    assert "ABC123 = {" in result

def test_serialize_preserve_matches_strip():
    doc = dict(BASIC, objects={"A": {"isa": "PBXGroup"}})
    assert serialize(doc, {"comment_strategy": "preserve"}) == serialize(doc, {"comment_strategy": "strip"})

def test_serialize_generate_comments():
    doc = dict(
        BASIC,
        objects={
            "ABC123": {"isa": "PBXFileReference", "path": "AppDelegate.swift"},
            "DEF456": {"isa": "PBXBuildFile", "fileRef": "ABC123"},
        },
    )
    result = serialize(doc, {"commentStrategy": "generate"})
    assert "ABC123 /* AppDelegate.swift */ = {" in result
    assert "DEF456 /* PBXBuildFile */ = {" in result

def test_serialize_custom_comment_function():
    doc = dict(BASIC, objects={"ABC123": {"isa": "PBXFileReference"}})
    result = serialize(doc, SerializeOptions(comment_strategy=lambda record: "Custom"))
    assert "ABC123 /* Custom */ = {" in result

def test_serialize_options_accept_strategy_models():
    options = SerializeOptions(comment_strategy=CustomComments(label_for=lambda record: "M"))
    assert isinstance(options.comment_strategy, CustomComments)
    assert isinstance(SerializeOptions(comment_strategy=StripComments()).comment_strategy, StripComments)

def test_serialize_options_reject_unknown_strategy():
    with pytest.raises(ValidationError):
        SerializeOptions(comment_strategy="shout")

def test_serialize_options_reject_bad_depth():
    with pytest.raises(ValidationError):
        SerializeOptions(max_depth=0)

def test_serialize_null_fields():
    result = serialize({"objects": {}})
    assert "archiveVersion = null;" in result
    assert "rootObject = null;" in result

def test_serialize_empty_record():
    result = serialize(dict(BASIC, objects={"A": {}}))
    assert "  A = {\n  };" in result

def test_serialize_non_dictionary_record_without_comment():
    result = serialize(dict(BASIC, objects={"A": "loose"}), {"comment_strategy": "generate"})
    assert "  A = loose;" in result

def test_serialize_quotes_numeric_looking_ids():
    result = serialize(dict(BASIC, objects={"13B07F": {"isa": "X"}}))
    assert '  "13B07F" = {' in result

def test_serialize_record_values_are_indented():
    doc = dict(BASIC, objects={"A": {"isa": "PBXGroup", "children": [{"x": 1}]}})
    result = serialize(doc)
    assert "    children = (\n      {\n        x = 1;\n      }\n    );" in result

def test_serialize_classes_and_extra_fields():
    doc = dict(BASIC, classes={"K": "v"}, custom=["a", "b"])
    lines = serialize(doc).splitlines()
    assert lines[-5:] == ["rootObject = ABC123;", "classes = {", "  K = v;", "};", "custom = (a, b);"]

def test_serialize_omits_empty_classes():
    assert "classes" not in serialize(dict(BASIC, classes={}))

def test_serialize_wrap_root():
    result = serialize(BASIC, {"wrap_root": True})
    assert result.splitlines() == [
        "{",
        "  archiveVersion = 1;",
        "  objectVersion = 56;",
        "  objects = {",
        "  };",
        "  rootObject = ABC123;",
        "}",
    ]

def test_serialize_accepts_document():
    doc = PlistDocument.from_python(BASIC)
    assert serialize(doc) == serialize(BASIC)

def test_aliases_are_identical():
    doc = dict(BASIC, objects={"A": {"isa": "PBXGroup"}})
    options = {"comment_strategy": "generate"}
    assert serialize(doc, options) == stringify(doc, options) == build(doc, options)

def test_formatter_depth_guard():
    deep = "leaf"
    for _ in range(10):
        deep = [deep, {"k": deep}]
    with pytest.raises(DepthExceeded):
        serialize({"objects": {}, "extra": deep}, {"max_depth": 5})

def test_raised_depth_limit_reports_depth_exceeded_from_plain_data():
    deep = "leaf"
    for _ in range(3000):
        deep = [deep]
    with pytest.raises(DepthExceeded) as excinfo:
        serialize({"objects": {}, "deep": deep}, {"max_depth": 10000})
    assert excinfo.value.max_depth == 10000

def test_raised_depth_limit_reports_depth_exceeded_from_value_tree():
    deep = PlistString(value="leaf")
    for _ in range(3000):
        deep = PlistDictionary(entries={"k": deep})
    formatter = PlistFormatter(options=SerializeOptions(max_depth=10000), enable_logger=False)
    with pytest.raises(DepthExceeded):
        formatter.format_document(PlistDocument(extra={"deep": deep}))

def test_formatter_depth_guard_counts_object_records():
    doc = {"objects": {"A": {"f": {"g": 1}}}}
    serialize(doc, {"max_depth": 3})
    with pytest.raises(DepthExceeded):
        serialize(doc, {"max_depth": 2})
    with pytest.raises(DepthExceeded):
        serialize({"objects": {"A": {}}}, {"max_depth": 1})

def test_generate_comment_with_document_model():
    doc = PlistDocument.from_python(dict(BASIC, objects={"A": {"name": "Target"}}))
    formatter = PlistFormatter(options=SerializeOptions(comment_strategy=GenerateComments()), enable_logger=False)
    assert "A /* Target */ = {" in formatter.format_document(doc)
