"""Unit tests for :mod:`persistent_include.parameters` – no process fixtures."""

import pydantic
import pytest

from persistent_include import (
    ArgumentsError,
    DuplicateParameterError,
    MalformedArgumentsError,
    PersistentIncludeParameters,
    parse_arguments,
    try_parse_arguments,
)

TOO_FEW = "Argument array must contain the script and includer file paths"
UNPAIRED = "Argument array must contain matched name / value pairs"
DUPLICATE = "Two parameters have the same name"


def test_no_parameters():
    """Verify a bare script / includer vector parses with zero parameters."""
    params = parse_arguments(["scriptPath", "includerPath"])
    assert params.script == "scriptPath"
    assert params.includer == "includerPath"
    assert params.count == 0
    assert params.get("foo") is None


def test_one_parameter_case_insensitive():
    """Verify lookups ignore the case of the queried name."""
    params = parse_arguments(["scriptPath", "includerPath", "FOO", "foobar"])
    assert params.count == 1
    assert params.get("foo") == "foobar"
    assert params.get("FOO") == "foobar"
    assert params.get("Foo") == "foobar"
    assert params.get("baz") is None


def test_three_parameters():
    """Verify values are kept verbatim while names are normalised."""
    params = parse_arguments(
        ["scriptPath", "includerPath", "FOO1", "BAR1", "foo2", "bar2", "foo3", "bar3"]
    )
    assert params.count == 3
    assert params.get("foo1") == "BAR1"
    assert params.get("FOO2") == "bar2"
    assert params.get("foo3") == "bar3"
    assert set(params.names()) == {"FOO1", "FOO2", "FOO3"}


@pytest.mark.parametrize("argv", [[], ["scriptPath"]])
def test_too_few_arguments(argv):
    """Verify vectors without both paths are rejected."""
    with pytest.raises(MalformedArgumentsError) as exc:
        parse_arguments(argv)
    assert exc.value.error_text == TOO_FEW
    assert exc.value.kind == "MalformedArguments"


def test_odd_argument_count():
    """Verify a name without a value is rejected."""
    with pytest.raises(MalformedArgumentsError) as exc:
        parse_arguments(["scriptPath", "includerPath", "FOO"])
    assert str(exc.value) == UNPAIRED


@pytest.mark.parametrize(
    "first, second",
    [("FOO", "foo"), ("Title", "tItLe"), ("straße", "STRASSE")],
)
def test_duplicate_parameter(first, second):
    """Verify names that differ only in case collide."""
    with pytest.raises(DuplicateParameterError) as exc:
        parse_arguments(["scriptPath", "includerPath", first, "bar", second, "baz"])
    assert str(exc.value) == DUPLICATE
    assert exc.value.kind == "DuplicateParameter"


def test_errors_share_base_class():
    """Verify both failures can be caught as ArgumentsError and ValueError."""
    with pytest.raises(ArgumentsError):
        parse_arguments(["s"])
    with pytest.raises(ValueError):
        parse_arguments(["s", "i", "a", "1", "A", "2"])


def test_escaped_spaces_in_includer():
    """Verify every backslash-space in the includer path becomes a space."""
    params = parse_arguments(["s", "path\\ with\\ spaces", "name", "value\\ kept"])
    assert params.includer == "path with spaces"
    assert params.get("name") == "value\\ kept"


def test_script_path_not_unescaped():
    """Verify only the includer path is unescaped."""
    params = parse_arguments(["my\\ script", "i"])
    assert params.script == "my\\ script"


def test_reparse_is_stable():
    """Verify parsing the same vector twice yields equal values."""
    argv = ["s", "i", "Title", "Home", "lang", "en"]
    first, second = parse_arguments(argv), parse_arguments(argv)
    assert first == second
    for name in ("title", "TITLE", "lang", "LANG", "missing"):
        assert first.get(name) == second.get(name)


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["s"],
        ["s", "i", "FOO"],
        ["s", "i", "FOO", "bar", "foo", "baz"],
        ["s", "i"],
        ["s", "i", "FOO", "foobar"],
    ],
)
def test_simplified_form_matches_detailed_form(argv):
    """Verify try_parse_arguments returns None exactly where parsing raises."""
    try:
        expected = parse_arguments(argv)
    except ArgumentsError:
        expected = None
    assert try_parse_arguments(argv) == expected


def test_mapping_access():
    """Verify subscript and membership use the same normalisation as get()."""
    params = PersistentIncludeParameters.of("s", "i", "color", "red")
    assert params["COLOR"] == "red"
    assert "Color" in params
    assert "size" not in params
    assert 42 not in params
    with pytest.raises(KeyError):
        params["size"]
    assert params.get("size", "M") == "M"
    assert dict(params.items()) == {"COLOR": "red"}


def test_from_argv_reads_sys_argv(monkeypatch):
    """Verify the ambient constructor uses the process argument vector."""
    monkeypatch.setattr("sys.argv", ["/usr/local/bin/nav.py", "/site/index.html", "page", "home"])
    params = PersistentIncludeParameters.from_argv()
    assert params.script == "/usr/local/bin/nav.py"
    assert params.includer == "/site/index.html"
    assert params.get("PAGE") == "home"


def test_try_from_argv_failure(monkeypatch):
    """Verify the simplified ambient constructor returns None on bad input."""
    monkeypatch.setattr("sys.argv", ["/usr/local/bin/nav.py"])
    assert PersistentIncludeParameters.try_from_argv() is None
    assert PersistentIncludeParameters.try_from_argv(["a", "b"]) is not None


def test_value_is_immutable():
    """Verify neither fields nor the parameter mapping can be changed."""
    params = parse_arguments(["s", "i", "FOO", "bar"])
    with pytest.raises(pydantic.ValidationError):
        params.includer = "other"
    with pytest.raises(TypeError):
        params.parameters["foo"] = "x"
    with pytest.raises(AttributeError):
        params.parameters.pop("FOO")
    assert params.count == 1
    assert params.get("foo") == "bar"


def test_model_copies_caller_mapping():
    """Verify the model copies the mapping it is built from."""
    source = {"FOO": "bar"}
    params = PersistentIncludeParameters(script="s", includer="i", parameters=source)
    source["BAZ"] = "qux"
    assert params.count == 1
    assert "BAZ" not in params


def test_equal_values_hash_equal():
    """Verify parsed values are hashable and usable as set members."""
    first = parse_arguments(["s", "i", "a", "1", "B", "2"])
    second = parse_arguments(["s", "i", "b", "2", "A", "1"])
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
    assert hash(parse_arguments(["s", "i"])) == hash(parse_arguments(["s", "i"]))


def test_direct_construction_rejects_unnormalised_names():
    """Verify a model built by hand cannot hold lower-case keys."""
    with pytest.raises(pydantic.ValidationError):
        PersistentIncludeParameters(script="s", includer="i", parameters={"foo": "bar"})
