"""
Command-line interface for stylequill.

Usage:
    stylequill check styles.xml
    stylequill export styles.xml --output word/styles.xml --builtins
    stylequill diff styles.xml "Heading 1" "Title" --builtins
    stylequill apply styles.xml document.xml --set Report --output out.xml
    stylequill builtins
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from .parser import XmlStyleParser
from .styles import StyleManager
from .models import Document
from .utils import BuiltInStyleCategory, StyleApplicationError, StyleError, setup_logging
from .version import __version__

console = Console()
error_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="stylequill",
        description="stylequill - style definitions, inheritance and styles.xml generation for DOCX",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stylequill check styles.xml
  stylequill export styles.xml -o styles_out.xml --builtins
  stylequill diff styles.xml "Heading 1" Title --builtins
  stylequill apply styles.xml document.xml --set Report -o out.xml
  stylequill builtins
        """,
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--no-rich", action="store_true", help="Plain log output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Parse and validate a style definition file")
    check_parser.add_argument("input", help="Style definition XML file")
    check_parser.add_argument("--builtins", action="store_true", help="Load built-in styles first")

    export_parser = subparsers.add_parser("export", help="Generate styles.xml from a definition file")
    export_parser.add_argument("input", help="Style definition XML file")
    export_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    export_parser.add_argument("--builtins", action="store_true", help="Include built-in styles")

    diff_parser = subparsers.add_parser("diff", help="Compare two styles")
    diff_parser.add_argument("input", help="Style definition XML file")
    diff_parser.add_argument("first", help="First style name")
    diff_parser.add_argument("second", help="Second style name")
    diff_parser.add_argument("--builtins", action="store_true", help="Load built-in styles first")

    apply_parser = subparsers.add_parser("apply", help="Apply a style set or mappings to document.xml")
    apply_parser.add_argument("input", help="Style definition XML file")
    apply_parser.add_argument("document", help="WordprocessingML document.xml")
    apply_parser.add_argument("--set", dest="style_set", help="Style set to apply")
    apply_parser.add_argument(
        "--map", action="append", default=[], metavar="PATTERN=STYLE",
        help="Restyle elements matching PATTERN (repeatable)",
    )
    apply_parser.add_argument("-o", "--output", help="Output file (default: overwrite input document)")
    apply_parser.add_argument("--builtins", action="store_true", help="Load built-in styles first")

    subparsers.add_parser("builtins", help="List built-in style names")
    subparsers.add_parser("version", help="Show version information")

    return parser


def _load_manager(path: str, builtins: bool) -> StyleManager:
    manager = StyleManager()
    if builtins:
        manager.load_all_built_in_styles()
    definition = XmlStyleParser(manager.config).load_from_file(path)
    definition.register_into(manager)
    return manager


def _report_error(error: StyleError) -> int:
    error_console.print(f"[red]Error ({error.kind.value}):[/red] {escape(error.message)}")
    for cause in error.caused_by_chain()[1:]:
        error_console.print(f"  [dim]caused by:[/dim] {escape(cause)}")
    return 1


def cmd_check(args) -> int:
    manager = _load_manager(args.input, args.builtins)
    manager.validate_all_styles()

    table = RichTable(title=f"Styles in {args.input}")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Base")
    table.add_column("Properties")
    for name in manager.get_all_style_names():
        style = manager.get_style(name)
        info = style.to_dict()
        props = ", ".join(
            f"{key}={value}"
            for group in ("paragraph", "character", "table")
            for key, value in info[group].items()
        )
        table.add_row(name, style.type.value, style.base_style or "", props)
    console.print(table)

    for set_name in manager.list_style_sets():
        style_set = manager.get_style_set(set_name)
        console.print(f"[bold]Style set[/bold] {set_name}: {', '.join(style_set)}")

    console.print(f"[green]OK[/green] {manager.style_count()} styles, "
                  f"{len(manager.list_style_sets())} style sets")
    return 0


def cmd_export(args) -> int:
    manager = _load_manager(args.input, args.builtins)
    if args.output:
        path = manager.write_styles_xml(args.output)
        console.print(f"[green]Saved:[/green] {path}")
    else:
        sys.stdout.write(manager.generate_styles_xml())
    return 0


def cmd_diff(args) -> int:
    manager = _load_manager(args.input, args.builtins)
    console.print(manager.compare_styles(args.first, args.second), markup=False)
    return 0


def cmd_apply(args) -> int:
    if not args.style_set and not args.map:
        error_console.print("[red]Error:[/red] give --set and/or --map")
        return 2

    mappings = {}
    for item in args.map:
        pattern, sep, style_name = item.partition("=")
        if not sep or not pattern or not style_name:
            error_console.print(f"[red]Error:[/red] invalid mapping '{item}', expected PATTERN=STYLE")
            return 2
        mappings[pattern] = style_name

    manager = _load_manager(args.input, args.builtins)
    document_path = Path(args.document)
    if not document_path.is_file():
        error_console.print(f"[red]Error:[/red] File not found: {document_path}")
        return 1
    document = Document.from_xml(document_path.read_bytes(), manager.config)

    reports = []
    errors: List[StyleApplicationError] = []
    operations = []
    if args.style_set:
        operations.append(lambda: manager.apply_style_set(args.style_set, document))
    if mappings:
        operations.append(lambda: manager.apply_style_mappings(document, mappings))
    for operation in operations:
        try:
            reports.append(operation())
        except StyleApplicationError as e:
            # Partial changes are kept and saved.
            errors.append(e)
            reports.append(e.report)

    output = Path(args.output or args.document)
    output.write_text(document.to_xml(), encoding="utf-8")
    for report in reports:
        console.print(f"{report.operation}: {report.tables_styled} tables, "
                      f"{report.paragraphs_styled} paragraphs, {report.runs_styled} runs")
    console.print(f"[green]Saved:[/green] {output}")

    for error in errors:
        _report_error(error)
        for failure in error.failures:
            error_console.print(f"  [dim]failed:[/dim] {escape(failure.message)}")
    return 1 if errors else 0


def cmd_builtins(args=None) -> int:
    table = RichTable(title="Built-in styles")
    table.add_column("Category", style="cyan")
    table.add_column("Styles")
    for category in BuiltInStyleCategory:
        names = StyleManager.get_built_in_style_names(category)
        table.add_row(category.value, ", ".join(names) or "-")
    console.print(table)
    return 0


def cmd_version(args=None) -> int:
    console.print(f"stylequill v{__version__}")
    return 0


COMMANDS = {
    "check": cmd_check,
    "export": cmd_export,
    "diff": cmd_diff,
    "apply": cmd_apply,
    "builtins": cmd_builtins,
    "version": cmd_version,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level, use_rich=not args.no_rich)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 2

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args)
    except StyleError as e:
        return _report_error(e)
