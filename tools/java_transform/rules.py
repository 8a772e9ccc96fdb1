import os
import yaml
from jsonschema import ValidationError, validate
from java_transform.AtomicFieldAccessors import AtomicFieldAccessors
from java_transform.DeprecatedRedirect import DeprecatedRedirect
from java_transform.DirectiveCleanup import DirectiveCleanup
from java_transform.GeneratedNotice import GeneratedNotice
from java_transform.ModifierPatch import ModifierPatch
from java_transform.OrganiseImports import OrganiseImports
from java_transform.PackageRename import PackageRename
from java_transform.QueueRename import QueueRename
from java_transform.RemoveIgnoredMethods import RemoveIgnoredMethods
from java_transform.TypeSubstitution import TypeSubstitution
from java_transform.errors import ConfigurationError
from java_transform.family import QueueFamily

FAMILIES_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "families")

_all_rules = {
    "PackageRename": PackageRename,
    "TypeSubstitution": TypeSubstitution,
    "QueueRename": QueueRename,
    "AtomicFieldAccessors": AtomicFieldAccessors,
    "RemoveIgnoredMethods": RemoveIgnoredMethods,
    "DeprecatedRedirect": DeprecatedRedirect,
    "ModifierPatch": ModifierPatch,
    "DirectiveCleanup": DirectiveCleanup,
    "GeneratedNotice": GeneratedNotice,
    "OrganiseImports": OrganiseImports,
}

_schema = """
type: object
properties:
  family:
    type: object
    properties:
      name:
        type: string
      naming:
        type: object
        properties:
          marker:
            type: string
          suffix:
            type: string
          arity_tags:
            type: array
            items:
              type: string
          linked_tokens:
            type: array
            items:
              type: string
          linked_word:
            type: string
        required:
        - marker
        - suffix
      types:
        type: object
        properties:
          int_methods:
            type: array
            items:
              type: string
          ref_array:
            type: object
            properties:
              names:
                type: array
                items:
                  type: string
          long_array:
            type: object
            properties:
              names:
                type: array
                items:
                  type: string
          narrow_long:
            type: array
            items:
              type: string
          nodes:
            type: object
            additionalProperties:
              type: string
          casts:
            type: boolean
    required:
    - name
    - naming
  rules:
    type: array
    items:
      type: object
      minProperties: 1
      maxProperties: 1
      properties:
        PackageRename:
          type: object
          properties:
            to:
              type: string
          required:
          - to
        QueueRename:
          type: object
          properties:
            parents:
              type: object
              additionalProperties:
                type: string
        AtomicFieldAccessors:
          type: object
          properties:
            updaters:
              type: object
              additionalProperties:
                type: string
            prefixes:
              type: object
              additionalProperties:
                enum:
                - lazy-set
                - compare-and-set
                - get-and-set
                - assign
                - read
            exchange:
              type: object
              additionalProperties:
                type: object
                properties:
                  method:
                    type: string
                  type:
                    type: string
                required:
                - method
                - type
          required:
          - updaters
          - prefixes
        DeprecatedRedirect:
          type: object
          properties:
            from:
              type: string
            to:
              type: string
          required:
          - from
          - to
        ModifierPatch:
          type: object
          properties:
            class:
              type: string
            class_modifiers:
              $ref: "#/definitions/modifier_change"
            constructor_modifiers:
              $ref: "#/definitions/modifier_change"
          required:
          - class
        GeneratedNotice:
          type: object
          properties:
            lines:
              type: array
              items:
                type: string
        OrganiseImports:
          type: object
          properties:
            drop:
              type: array
              items:
                type: string
            rename:
              type: object
              additionalProperties:
                type: string
            add:
              type: array
              items:
                type: string
required:
- family
- rules
definitions:
  modifier_change:
    type: object
    properties:
      add:
        type: array
        items:
          type: string
      remove:
        type: array
        items:
          type: string
"""


class RuleSet:
    """The rules to be applied to the units of a queue family, in order"""

    def __init__(self, family, rules):
        self.family = family
        self.rules = rules

    def __iter__(self):
        return iter(self.rules)

    def __len__(self):
        return len(self.rules)


def load_rules(rules_file):
    """Load the rules from the given rules file. Returns a RuleSet object"""
    # Read the rules content
    with open(rules_file) as f:
        rules_content = yaml.safe_load(f)

    # Validate the rules content
    try:
        validate(rules_content, yaml.safe_load(_schema))
    except ValidationError as e:
        raise ConfigurationError(f"{rules_file}: invalid rules: {e.message}") from e

    family = QueueFamily(rules_content["family"])

    # Generate the resulting list of rules objects
    res = []
    for rule in rules_content["rules"]:
        for rule_name, params in rule.items():
            if rule_name not in _all_rules:
                raise ConfigurationError(f"{rules_file}: Unknown rule '{rule_name}'")
            cls = _all_rules[rule_name]
            res.append(cls(params or {}, family))

    return RuleSet(family, res)


def family_rules_file(name):
    """Returns the path of the bundled rules file for the given queue family"""
    return os.path.join(FAMILIES_DIR, f"{name}.yaml")


def available_families():
    return sorted(os.path.splitext(f)[0] for f in os.listdir(FAMILIES_DIR) if f.endswith(".yaml"))
