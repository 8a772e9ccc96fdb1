import pytest

import java_transform.rules as rules
from java_transform.errors import ConfigurationError

FAMILY = """\
family:
  name: test
  naming:
    marker: Atomic
    suffix: ArrayQueue
    arity_tags: [Spsc]
"""


def _rules_file(tmp_path, content):
    path = tmp_path / "rules.yaml"
    path.write_text(content)
    return str(path)


def test_bundled_families():
    assert rules.available_families() == ["array", "linked"]


def test_array_rules_order(array_rules):
    assert array_rules.family.name == "array"
    assert [type(r).__name__ for r in array_rules] == [
        "PackageRename",
        "TypeSubstitution",
        "QueueRename",
        "AtomicFieldAccessors",
        "RemoveIgnoredMethods",
        "DeprecatedRedirect",
        "DirectiveCleanup",
        "OrganiseImports",
        "GeneratedNotice",
    ]


def test_linked_rules_have_no_redirect(linked_rules):
    names = [type(r).__name__ for r in linked_rules]
    assert "DeprecatedRedirect" not in names
    assert "ModifierPatch" in names
    assert len(linked_rules) == 9


def test_rules_without_parameters(tmp_path):
    rule_set = rules.load_rules(_rules_file(tmp_path, FAMILY + "rules:\n- DirectiveCleanup:\n- RemoveIgnoredMethods: {}\n"))
    assert len(rule_set) == 2


def test_missing_family_is_an_error(tmp_path):
    with pytest.raises(ConfigurationError, match="invalid rules"):
        rules.load_rules(_rules_file(tmp_path, "rules:\n- DirectiveCleanup: {}\n"))


def test_unknown_rule_is_an_error(tmp_path):
    with pytest.raises(ConfigurationError, match="Unknown rule 'RenameEverything'"):
        rules.load_rules(_rules_file(tmp_path, FAMILY + "rules:\n- RenameEverything: {}\n"))


def test_unknown_access_kind_is_an_error(tmp_path):
    content = (
        FAMILY
        + """\
rules:
- AtomicFieldAccessors:
    updaters:
      producerIndex: P_INDEX_UPDATER
    prefixes:
      so: store-release
"""
    )
    with pytest.raises(ConfigurationError, match="invalid rules"):
        rules.load_rules(_rules_file(tmp_path, content))


def test_missing_rule_parameter_is_an_error(tmp_path):
    with pytest.raises(ConfigurationError, match="invalid rules"):
        rules.load_rules(_rules_file(tmp_path, FAMILY + "rules:\n- DeprecatedRedirect:\n    from: weakOffer\n"))
