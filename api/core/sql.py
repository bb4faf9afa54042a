"""
Small SQL building blocks shared by the resource repositories.

Partial updates are driven by a fixed field -> column table owned by each
repository. Only column names from that table are ever interpolated into
SQL; values always travel as positional parameters.
"""

from __future__ import annotations

from typing import Any, Mapping

# Strictly monotonic even when two updates land inside the same now().
BUMP_UPDATED_AT = "updated_at = GREATEST(now(), updated_at + interval '1 microsecond')"


def build_assignments(
    columns: Mapping[str, str],
    changes: Mapping[str, Any],
    *,
    first_param: int = 1,
) -> tuple[list[str], list[Any]]:
    """
    Turn `changes` into ["col = $n", ...] plus the matching argument list.

    Raises ValueError for a field that is not in `columns`.
    """
    assignments: list[str] = []
    args: list[Any] = []
    for field, value in changes.items():
        column = columns.get(field)
        if column is None:
            raise ValueError(f"Field is not updatable: {field}")
        args.append(value)
        assignments.append(f"{column} = ${first_param + len(args) - 1}")
    return assignments, args


def affected_rows(status: str) -> int:
    """
    Parse the row count out of an asyncpg status tag ("DELETE 3", "UPDATE 0").
    """
    try:
        return int((status or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0
