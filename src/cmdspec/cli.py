"""
Command line front end.

Works on a YAML declaration manifest (see `DeclarationManifest`):

    cmdspec list declarations.yaml
    cmdspec validate --strict declarations.yaml
    cmdspec usage declarations.yaml app remote add
    cmdspec format declarations.yaml app remote add
    cmdspec syntax
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

import yaml
from pydantic import ValidationError

from cmdspec.config import BuilderConfig
from cmdspec.exceptions import CommandSpecError, ErrorLevel
from cmdspec.structure import DataModel, DeclarationManifest, ModelBuilder, SubCommand
from cmdspec.templates import format_comment, render_usage

logger = logging.getLogger(__name__)

SYNTAX_GUIDE = """\
Command comment syntax

Command declaration:

  <Function> is a subcommand `<command> <subcommand>...` that <description>

  A single token declares the root command itself. Without backticks the
  root command is named after the function in kebab-case.
  Inline aliases: `app remote add` (aliases: a, new) that ...

Aliases:

  aliases: a, new

Flags block (tab indented, blank line after `Flags:`):

  Flags:

  \tname: --name, -n The user name (default: "guest")
  \tfile: @1 The input file
  \textra: 1...3 Extra files

Parameter attributes, in a block at the start or end of the description:

  (required)                          parameter must be given
  (global) / (inherited)              visible to all subcommands
  (from: parent)                      use the ancestor's declaration
  (aka: n, nm)                        extra flag aliases
  (default: value)                    default value
  (default from environment VAR; fallback: value)
  (parser: pkg.Func) / (generator: "import/path".Func)

Parameters may also be described in a comment on the parameter's own line
or on the line above it. `flag name ...` and `param name ...` lines and
`name: @1 ...` lines outside the flags block are accepted as well.
Parameters without a flag get the kebab-cased parameter name.
"""


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace) -> BuilderConfig:
    config = BuilderConfig.from_yaml(args.config) if args.config else BuilderConfig()
    if getattr(args, "strict", False):
        config.strict = True
    return config


def _build_model(args: argparse.Namespace) -> tuple[DataModel, ModelBuilder]:
    manifest = DeclarationManifest.from_yaml(args.manifest)
    builder = ModelBuilder(_load_config(args))
    builder.add_all(manifest.declarations)
    return builder.build(), builder


def _find_node(model: DataModel, path: list[str]):
    command = model.command(path[0])
    if command is None:
        raise CommandSpecError(f"Unknown command `{path[0]}`")
    if len(path) == 1:
        return command
    node = command.find(path[1:])
    if node is None:
        raise CommandSpecError(f"Unknown command `{' '.join(path)}`")
    return node


def handle_list(args: argparse.Namespace) -> int:
    model, _ = _build_model(args)
    for command in model.commands:
        print(command.name)
        for node in command.walk():
            print(f"  {' '.join(node.sequence())}")
    return 0


def handle_validate(args: argparse.Namespace) -> int:
    model, builder = _build_model(args)
    count = sum(1 for _ in model.walk())
    if builder.warnings:
        print(f"Valid with {len(builder.warnings)} warning(s): {len(model.commands)} command(s), {count} subcommand(s)")
        for message in builder.warnings.messages():
            print(f"  - {message}")
    else:
        print(f"Valid: {len(model.commands)} command(s), {count} subcommand(s)")
    return 0


def handle_usage(args: argparse.Namespace) -> int:
    model, _ = _build_model(args)
    node = _find_node(model, args.path)
    if not isinstance(node, SubCommand):
        raise CommandSpecError("Usage is rendered for subcommands; give a subcommand path")
    print(render_usage(node), end="")
    return 0


def handle_format(args: argparse.Namespace) -> int:
    model, _ = _build_model(args)
    node = _find_node(model, args.path)
    print(format_comment(node, include_inherited=args.include_inherited))
    return 0


def handle_syntax(args: argparse.Namespace) -> int:
    print(SYNTAX_GUIDE, end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the main ArgumentParser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="cmdspec",
        description="Build command models from documentation comments.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging and source locations in errors")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def manifest_command(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("manifest", help="YAML declaration manifest")
        sub.add_argument("-c", "--config", help="YAML builder configuration")
        return sub

    list_parser = manifest_command("list", "list commands and subcommands")
    list_parser.set_defaults(handler=handle_list)

    validate_parser = manifest_command("validate", "build the model and report problems")
    validate_parser.add_argument("--strict", action="store_true", help="treat style warnings as errors")
    validate_parser.set_defaults(handler=handle_validate)

    usage_parser = manifest_command("usage", "print the help view of a subcommand")
    usage_parser.add_argument("path", nargs="+", help="command path, e.g. app remote add")
    usage_parser.set_defaults(handler=handle_usage)

    format_parser = manifest_command("format", "print the canonical comment of a command")
    format_parser.add_argument("path", nargs="+", help="command path, e.g. app remote add")
    format_parser.add_argument(
        "--include-inherited",
        action="store_true",
        help="render values taken over from ancestors",
    )
    format_parser.set_defaults(handler=handle_format)

    syntax_parser = subparsers.add_parser("syntax", help="print the comment syntax guide")
    syntax_parser.set_defaults(handler=handle_syntax)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    _configure_logging(args.verbose)

    try:
        return int(args.handler(args))
    except CommandSpecError as exc:
        # Verbose runs also show where the offending function is defined
        logger.error("%s", exc.describe(ErrorLevel.DEVELOPER if args.verbose else ErrorLevel.USER))
        return 1
    except ValidationError as exc:
        logger.error("invalid manifest: %s", exc)
        return 1
    except yaml.YAMLError as exc:
        logger.error("unreadable YAML: %s", exc)
        return 1
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
