#!/usr/bin/env python3

import argparse
import os
import sys
import java_transform.rules as rules
from java_transform.TransformedUnit import TransformedUnit
from java_transform.errors import BatchError, TransformError


def apply_transform(in_file, out_file, rules, verbose=False):
    """
    Apply the Java transformation specified by the given rules object.
    The result is written to `out_file`.
    """
    # Load the input source file, preparing it for transformations
    unit = TransformedUnit(in_file)

    # Apply the rules
    for r in rules:
        r.run(unit, verbose)

    # Save the file with transformations to the destination
    unit.save(out_file)


def load_rules(rules_file):
    """Load the given rules file. Returns a RuleSet object"""
    return rules.load_rules(rules_file)


def family_rules(family):
    """Load the bundled rules for the given queue family ('array' or 'linked')"""
    return rules.load_rules(rules.family_rules_file(family))


def output_file_name(in_file, rules):
    """The name of the generated file: the translated class name, with the extension of the input"""
    stem, ext = os.path.splitext(os.path.basename(in_file))
    return rules.family.translate(stem) + ext


def generate(out_dir, in_files, rules, verbose=False):
    """
    Transform all the input files, writing the results in `out_dir`.
    The files are independent: if one of them fails, the error is reported and we continue with the next one. At the
    end, a BatchError is raised if there were failures. I/O errors are not caught.
    :return: The list of generated files
    """
    os.makedirs(out_dir, exist_ok=True)

    generated = []
    failures = []
    for in_file in in_files:
        print(f"Processing {in_file}")
        out_file = os.path.join(out_dir, output_file_name(in_file, rules))
        try:
            apply_transform(in_file, out_file, rules, verbose)
        except TransformError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            failures.append((in_file, e))
            continue
        print(f"Saved to {out_file}")
        generated.append(out_file)

    if failures:
        raise BatchError(failures)
    return generated


def _print_ast(in_file):
    """Dumps the AST content of the input file"""
    unit = TransformedUnit(in_file)
    print("# kind location extent")

    def _loc_to_str(point):
        return f"{point[0] + 1}:{point[1] + 1}"

    def _print(node, indent=0):
        # Print the current node
        print("  " * indent, end="")
        print(
            node.type,
            _loc_to_str(node.start_point),
            f"{_loc_to_str(node.start_point)}-{_loc_to_str(node.end_point)}",
        )
        # Recurse down to children
        for c in node.named_children:
            _print(c, indent + 1)

    _print(unit.cursor)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate the atomic (field updater based) queues from the Unsafe based queues"
    )
    parser.add_argument("output", type=str, help="The directory where the generated files are written")
    parser.add_argument("input", type=str, nargs="+", help="Input file(s) to be transformed")
    parser.add_argument(
        "-f",
        "--family",
        type=str,
        choices=rules.available_families(),
        default="array",
        help="The queue family of the input files",
    )
    parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="File containing the transformation rules to be applied; overrides --family",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Display more information when running the script",
    )
    parser.add_argument(
        "--print-ast",
        action="store_true",
        default=False,
        help="Dumps the AST from the input files",
    )
    args = parser.parse_args(argv)

    if args.print_ast:
        for in_file in args.input:
            _print_ast(in_file)
        return

    rule_set = load_rules(args.rules) if args.rules else family_rules(args.family)

    # Do the transform
    try:
        generate(args.output, args.input, rule_set, args.verbose)
    except BatchError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
