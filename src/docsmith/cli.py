"""Command-line interface for docsmith."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import settings


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="docsmith - Fill {{token}} placeholders in Word templates"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Fill command
    fill_parser = subparsers.add_parser("fill", help="Substitute tokens from a JSON file")
    fill_parser.add_argument("template", help="Template .docx file")
    fill_parser.add_argument("bindings", help="JSON object of token name to value")
    fill_parser.add_argument("--output", "-o", required=True, help="Output .docx file")

    # Table command
    table_parser = subparsers.add_parser("table", help="Fill a table from a JSON file")
    table_parser.add_argument("template", help="Template .docx file")
    table_parser.add_argument("data", help="JSON list of rows (lists, or objects with --composite)")
    table_parser.add_argument("--output", "-o", required=True, help="Output .docx file")
    table_parser.add_argument(
        "--skip-header", action="store_true", help="Keep the first row as a header"
    )
    table_parser.add_argument(
        "--composite", action="store_true", help="Substitute tokens into a template row"
    )
    table_parser.add_argument(
        "--table", type=int, default=0, help="Index of the table to fill (default: 0)"
    )

    # Tokens command
    tokens_parser = subparsers.add_parser("tokens", help="List tokens found in a template")
    tokens_parser.add_argument("template", help="Template .docx file")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    try:
        if args.command == "fill":
            run_fill(Path(args.template), Path(args.bindings), Path(args.output))
        elif args.command == "table":
            run_table(
                Path(args.template),
                Path(args.data),
                Path(args.output),
                skip_header=args.skip_header,
                composite=args.composite,
                table_index=args.table,
            )
        elif args.command == "tokens":
            run_tokens(Path(args.template))
        else:
            parser.print_help()
            sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _read_json(path: Path):
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def run_fill(template: Path, bindings_path: Path, output: Path):
    """Substitute the bindings in a JSON file into a template."""
    from .document import TemplateDocument
    from .values import load_bindings

    bindings = load_bindings(_read_json(bindings_path), base_dir=bindings_path.parent)
    doc = TemplateDocument.open(template).substitute_tokens(bindings)
    doc.save(output)

    result = doc.last_result
    print(f"Replaced {result.replacements} tokens -> {output}")
    if result.unresolved_tokens:
        print(f"Unresolved: {', '.join(result.unresolved_tokens)}")


def run_table(
    template: Path,
    data_path: Path,
    output: Path,
    skip_header: bool,
    composite: bool,
    table_index: int,
):
    """Fill a table of a template from a JSON list of rows."""
    from .document import TemplateDocument
    from .values import load_bindings

    rows = _read_json(data_path)
    doc = TemplateDocument.open(template)
    if composite:
        records = [load_bindings(row, base_dir=data_path.parent) for row in rows]
        doc.fill_composite_table(skip_header, records, table_index=table_index)
    else:
        doc.fill_table(skip_header, rows, table_index=table_index)
    doc.save(output)
    print(f"Filled {len(rows)} rows -> {output}")


def run_tokens(template: Path):
    """Print the tokens found in a template, one per line."""
    from .document import TemplateDocument

    for name in TemplateDocument.open(template).find_tokens():
        print(name)


if __name__ == "__main__":
    main()
