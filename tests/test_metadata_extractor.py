from conftest import APP_SOURCE, DRIVER_SOURCE

from hubdeploy.modules.hubinstall.domain import ArtifactKind
from hubdeploy.modules.hubinstall.metadata import extract_metadata, extract_value, looks_like_artifact


def test_definition_line_yields_name_and_namespace():
    text = 'definition(name: "File Manager Device", namespace: "jpage4500", author: "Joe Page") {\n'

    assert extract_value(text, "name") == "File Manager Device"
    assert extract_value(text, "namespace") == "jpage4500"


def test_multiline_definition_with_single_quotes():
    text = "definition(\n    name: 'Dropbox Album',\n    namespace:   'jpage4500'  ,\n)\n"

    assert extract_value(text, "name") == "Dropbox Album"
    assert extract_value(text, "namespace") == "jpage4500"


def test_quotes_are_dropped_anywhere_in_value():
    assert extract_value('name: "Joe\'s "Driver"\n', "name") == "Joes Driver"


def test_closing_parenthesis_terminates_value():
    assert extract_value("definition(namespace: jpage4500) {", "namespace") == "jpage4500"


def test_missing_key_is_absent():
    assert extract_value("definition(name: 'x')\n", "hub") is None


def test_first_occurrence_wins():
    text = "// id: 12\n// id: 99\n"

    assert extract_value(text, "id") == "12"


def test_value_at_end_of_text_without_terminator_is_absent():
    # the trailing value is discarded even though it was fully read
    assert extract_value("// id: 1711", "id") is None
    assert extract_value("// id: 1711\n", "id") == "1711"


def test_overlong_value_is_absent():
    assert extract_value("name: " + "x" * 300 + "\n", "name") is None
    assert extract_value("name: " + "x" * 257, "name") is None


def test_value_at_length_limit_is_kept():
    value = "y" * 255
    assert extract_value(f"name: {value}\n", "name") == value


def test_extract_metadata_reads_comment_block():
    text = "/*\n * hub: 192.168.0.200\n * type: device\n * id: 1711\n */\n" + DRIVER_SOURCE

    extracted = extract_metadata(text)

    assert extracted.hub_ip == "192.168.0.200"
    assert extracted.declared_kind is ArtifactKind.DRIVER
    assert extracted.declared_id == "1711"
    assert extracted.name == "File Manager Device"
    assert extracted.namespace == "jpage4500"


def test_declared_type_is_case_insensitive_and_unknown_is_ignored():
    assert extract_metadata("// type: APP\n").declared_kind is ArtifactKind.APP
    assert extract_metadata("// type: Device\n").declared_kind is ArtifactKind.DRIVER
    assert extract_metadata("// type: library\n").declared_kind is None


def test_extraction_is_idempotent():
    assert extract_metadata(APP_SOURCE) == extract_metadata(APP_SOURCE)


def test_empty_value_counts_as_missing():
    assert extract_metadata("// id: \n").declared_id is None


def test_looks_like_artifact():
    assert looks_like_artifact(APP_SOURCE)
    assert looks_like_artifact("DEFINITION(name: 'x')")
    assert not looks_like_artifact("println 'hello'")
