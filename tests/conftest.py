import textwrap

import pytest

import java_transform_tool as tr
from java_transform.TransformedUnit import TransformedUnit


@pytest.fixture(scope="session")
def array_rules():
    return tr.family_rules("array")


@pytest.fixture(scope="session")
def linked_rules():
    return tr.family_rules("linked")


def _transform(source, rules, filename="Test.java"):
    """Run the rules over the given source and return the generated text"""
    unit = TransformedUnit(filename, textwrap.dedent(source))
    for r in rules:
        r.run(unit, False)
    return unit.get_modified_content()


@pytest.fixture
def transform():
    return _transform


@pytest.fixture
def write_java(tmp_path):
    """Write a Java source in the temporary directory; returns its path"""

    def _write(name, source):
        path = tmp_path / "src" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return str(path)

    return _write
