from __future__ import annotations

"""
Unit tests for the Record Model.

Verifies:
1. Extraction of trailing Fields from positional arguments.
2. Message rendering for empty and printf-style templates.
3. Graceful degradation on mismatched templates and missing caller info.
4. Derived file and function names.
5. Immutability after construction.
"""

import dataclasses
from datetime import datetime

import pytest

from logrelay.domain.levels import INFO, WARN
from logrelay.domain.record import Fields, LogRecord, new_record


def _record(msg: str, *args):
    return new_record("test", INFO, "/src/app/main.py", "app.main.run", 42, msg, *args)


# -----------------------------------------------------------------------------
# Field extraction
# -----------------------------------------------------------------------------
def test_trailing_fields_are_extracted():
    fields = Fields(user="bob", attempt=2)
    record = _record("msg %s", "x", fields)

    assert record.args == ("x",)
    assert record.fields == fields


def test_without_fields_args_are_unchanged():
    record = _record("msg %s", "x")

    assert record.args == ("x",)
    assert record.fields == {}


def test_plain_dict_is_not_treated_as_fields():
    """Only a Fields instance marks structured context."""
    payload = {"a": 1}
    record = _record("payload %s", payload)

    assert record.args == (payload,)
    assert record.fields == {}


def test_fields_not_in_last_position_stay_in_args():
    fields = Fields(a=1)
    record = _record("", fields, "tail")

    assert record.args == (fields, "tail")
    assert record.fields == {}


def test_record_keeps_a_copy_of_fields():
    fields = Fields(a=1)
    record = _record("x", fields)
    fields["b"] = 2

    assert record.fields == {"a": 1}


# -----------------------------------------------------------------------------
# Message rendering
# -----------------------------------------------------------------------------
def test_empty_template_joins_args_with_spaces():
    assert _record("", "a", "b").get_message() == "a b"


def test_empty_template_stringifies_non_string_args():
    assert _record("", "count", 3, None).get_message() == "count 3 None"


def test_printf_template_substitutes_args():
    assert _record("%s-%s", "a", "b").get_message() == "a-b"


def test_template_without_args_is_returned_as_is():
    assert _record("plain message").get_message() == "plain message"


def test_percent_escape_without_args():
    assert _record("100%% done").get_message() == "100% done"


@pytest.mark.parametrize(
    "msg, args, expected",
    [
        ("%s %s", ("a",), "%s %s a"),
        ("value %d", ("x",), "value %d x"),
        ("missing %s", (), "missing %s"),
        ("extra", ("a", "b"), "extra a b"),
    ],
)
def test_mismatched_template_never_raises(msg: str, args: tuple, expected: str):
    """Arity or type mismatches keep the directive verbatim."""
    assert _record(msg, *args).get_message() == expected


def test_fields_do_not_take_part_in_rendering():
    record = _record("hello %s", "world", Fields(k="v"))
    assert record.get_message() == "hello world"


# -----------------------------------------------------------------------------
# Derived attributes
# -----------------------------------------------------------------------------
def test_derived_file_and_function_names():
    record = new_record(
        "svc", WARN, "/opt/app/pkg/handlers.py", "github.com/acme/pkg.Server.serve", 7, ""
    )

    assert record.name == "svc"
    assert record.level == WARN
    assert record.level_name == "WARN"
    assert record.pathname == "/opt/app/pkg/handlers.py"
    assert record.filename == "handlers.py"
    assert record.func_name == "pkg.Server.serve"
    assert record.short_func_name == "serve"
    assert record.lineno == 7


def test_missing_caller_info_degrades_to_placeholders():
    record = new_record("svc", INFO, None, None, None, None)

    assert record.pathname == "??"
    assert record.filename == "??"
    assert record.short_func_name == "??"
    assert record.lineno == 0
    assert record.msg == ""


def test_unregistered_level_name_is_synthesized():
    record = new_record("svc", 5, "a.py", "f", 1, "")
    assert record.level_name == "level 5"


def test_creation_time_is_stamped():
    before = datetime.now()
    record = _record("x")
    after = datetime.now()

    assert before <= record.created <= after


# -----------------------------------------------------------------------------
# Immutability
# -----------------------------------------------------------------------------
def test_record_is_frozen():
    record = _record("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.msg = "changed"  # type: ignore[misc]


def test_record_fields_are_read_only():
    record = _record("x", Fields(a=1))
    with pytest.raises(TypeError):
        record.fields["b"] = 2  # type: ignore[index]


def test_new_record_is_an_alias_of_create():
    record = LogRecord.create("test", INFO, "a.py", "f", 1, "m")
    assert isinstance(record, LogRecord)
    assert record.get_message() == "m"
