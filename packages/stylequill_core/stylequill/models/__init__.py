"""Document element wrappers used as style targets."""

from .elements import (
    Document,
    Paragraph,
    Run,
    Table,
    TableRow,
    TableCell,
    StyleTarget,
    TargetKind,
)

__all__ = [
    "Document",
    "Paragraph",
    "Run",
    "Table",
    "TableRow",
    "TableCell",
    "StyleTarget",
    "TargetKind",
]
