"""Command-line tools for required-attribute selectors and tag helper configs."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from tagbind.binding import HtmlElement, load_registry
from tagbind.selectors import parse_required_attributes, requirement_to_dict
from tagbind.selectors.evaluation import AttributePair


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Run the ``tagbind`` command line.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        CLI argument list. When ``None``, process arguments are used.

    Returns
    -------
    int
        Exit code (`0` on success, `1` on invalid selectors or configs).
    """

    parser = argparse.ArgumentParser(description="Parse and evaluate tag helper required-attribute selectors.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser("parse", help="Parse one required-attributes selector string.")
    parse_parser.add_argument("selector", help="Selector string, e.g. \"asp-route-*, [href^='/']\".")
    parse_parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the parsed requirements JSON. Nothing is written when omitted.",
    )
    parse_parser.add_argument("--prefix", default="selector", help="Output filename prefix.")

    check_parser = subparsers.add_parser("check", help="Validate a tag helper JSON or YAML config.")
    check_parser.add_argument("--config", required=True, help="Path to tag helper JSON or YAML config.")

    match_parser = subparsers.add_parser("match", help="List tag helpers bound to one element.")
    match_parser.add_argument("--config", required=True, help="Path to tag helper JSON or YAML config.")
    match_parser.add_argument("--tag", required=True, help="Element tag name.")
    match_parser.add_argument(
        "--attribute",
        action="append",
        default=[],
        type=_parse_attribute_argument,
        metavar="NAME[=VALUE]",
        help="Element attribute. Repeat for several attributes.",
    )
    match_parser.add_argument("--parent-tag", default=None, help="Tag name of the enclosing element.")

    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command == "parse":
        return _run_parse(args.selector, output_dir=args.output_dir, prefix=str(args.prefix))
    if args.command == "check":
        return _run_check(args.config)
    return _run_match(
        args.config,
        tag=str(args.tag),
        attributes=tuple(args.attribute),
        parent_tag=args.parent_tag,
    )


def _run_parse(selector: str, *, output_dir: str | None, prefix: str) -> int:
    """Parse one selector and report requirements or diagnostics."""

    result = parse_required_attributes(selector)
    for diagnostic in result.diagnostics:
        level = "error" if diagnostic.is_fatal else "warning"
        print(f"{level}: {diagnostic.format()} [{diagnostic.kind.value}]")

    if not result.success or result.requirements is None:
        print(f"Selector invalid: {selector!r}")
        return 1

    print(f"Parsed {len(result.requirements)} required attribute(s)")
    for requirement in result.requirements:
        mode = "css" if requirement.is_css_selector else "plain"
        print(f"  {requirement.to_selector()} ({mode})")

    if output_dir is not None:
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        summary_path = directory / f"{prefix}_requirements.json"
        summary = {
            "selector": selector,
            "requirements": [requirement_to_dict(item) for item in result.requirements],
            "warnings": [item.format() for item in result.diagnostics],
        }
        summary_path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")
        print(f"Requirements JSON: {summary_path}")
    return 0


def _run_check(config_path: str) -> int:
    """Validate a config file and print a summary."""

    try:
        registry = load_registry(config_path)
    except ValueError as exc:
        print(f"Config invalid: {config_path}")
        print(str(exc))
        return 1

    n_targets = sum(len(manifest.targets) for manifest in registry.list())
    print(f"Config OK: {len(registry)} tag helper(s), {n_targets} target(s)")
    return 0


def _run_match(
    config_path: str,
    *,
    tag: str,
    attributes: tuple[AttributePair, ...],
    parent_tag: str | None,
) -> int:
    """Print ids of the tag helpers bound to one element."""

    try:
        registry = load_registry(config_path)
    except ValueError as exc:
        print(f"Config invalid: {config_path}")
        print(str(exc))
        return 1

    element = HtmlElement(tag_name=tag, attributes=attributes, parent_tag=parent_tag)
    bound = registry.bind(element)
    if not bound:
        print(f"No tag helpers bound to <{tag}>")
        return 0

    print(f"Bound to <{tag}>: {', '.join(manifest.helper_id for manifest in bound)}")
    return 0


def _parse_attribute_argument(raw: str) -> AttributePair:
    """Split ``NAME=VALUE`` (or bare ``NAME``) into an attribute pair."""

    name, separator, value = raw.partition("=")
    if not name:
        raise argparse.ArgumentTypeError(f"attribute {raw!r} must start with a name")
    return name, value if separator else None


def main() -> None:
    """Execute the CLI and exit with the returned code."""

    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()


__all__ = ["main", "run_cli"]
