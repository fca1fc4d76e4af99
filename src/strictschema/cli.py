"""strictschema CLI: compile schemas for structured-output generation."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def _configure_logging(args) -> None:
    """Route library logging to stderr at the level picked by --quiet/--verbose."""
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def main():
    """Main CLI entry point for strictschema commands."""
    try:
        strictschema_version = get_version("strictschema")
    except PackageNotFoundError:
        strictschema_version = "dev"

    parser = argparse.ArgumentParser(
        prog="strictschema",
        description="strictschema: compile JSON Schema into the structured-output dialect"
    )
    parser.add_argument("--version", action="version", version=f"strictschema {strictschema_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    verbosity = parent_parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    verbosity.add_argument(
        "--verbose",
        action="store_true",
        help="Log every pruned node."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # compile command
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a resolved JSON Schema file",
        parents=[parent_parser]
    )
    compile_parser.add_argument(
        "schema_path",
        type=Path,
        help="Path to a resolved JSON Schema file"
    )
    compile_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory (prints the compiled schema to stdout if omitted)"
    )
    compile_parser.add_argument(
        "--envelope",
        metavar="NAME",
        default=None,
        help="Wrap the compiled schema in a strict json_schema response format with this name"
    )
    compile_parser.add_argument(
        "--description",
        default=None,
        help="Description for the response format (requires --envelope)"
    )
    compile_parser.add_argument(
        "--report",
        action="store_true",
        help="Also write compile_report.json (requires --output-dir)"
    )

    args = parser.parse_args()

    if args.command == "compile":
        _configure_logging(args)

        from .api import compile_schema, response_format_from_result, validate_response_format_name
        from ._internal.canonical_json import canonical_dumps
        from ._internal.contract import (
            COMPILE_REPORT_FILENAME,
            COMPILED_SCHEMA_FILENAME,
            RESPONSE_FORMAT_FILENAME,
            UNSUPPORTED_ROOT_MESSAGE,
        )

        if args.description is not None and args.envelope is None:
            print("Error: --description requires --envelope.", file=sys.stderr)
            sys.exit(2)
        if args.report and args.output_dir is None:
            print("Error: --report requires --output-dir.", file=sys.stderr)
            sys.exit(2)

        try:
            schema_path = Path(args.schema_path).resolve()
            output_dir = Path(args.output_dir).resolve() if args.output_dir else None

            if args.envelope is not None:
                validate_response_format_name(args.envelope)

            result = compile_schema(schema_path)

            if output_dir is not None:
                output_dir.mkdir(parents=True, exist_ok=True)
                if args.report:
                    report_out = output_dir / COMPILE_REPORT_FILENAME
                    report_out.write_text(canonical_dumps(result.model_dump()) + "\n", encoding="utf-8")

            if not result.ok:
                if not args.quiet:
                    print(f"[FAILED] {schema_path.name}: {UNSUPPORTED_ROOT_MESSAGE}")
                    for issue in result.issues:
                        print(f"  {issue.code} {issue.path}: {issue.message}")
                sys.exit(1)

            if args.envelope is not None:
                payload = response_format_from_result(result, args.envelope, args.description)
                filename = RESPONSE_FORMAT_FILENAME
            else:
                payload = result.compiled_schema
                filename = COMPILED_SCHEMA_FILENAME

            if output_dir is None:
                print(json.dumps(payload, indent=2, ensure_ascii=False))
                return

            schema_out = output_dir / filename
            schema_out.write_text(canonical_dumps(payload) + "\n", encoding="utf-8")
            if not args.quiet:
                print("[OK] Compilation complete")
                print(f"  Output: {schema_out}")
                print(f"  Hash: {result.schema_hash}")
                print(f"  Pruned: {result.pruned_count}")
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
