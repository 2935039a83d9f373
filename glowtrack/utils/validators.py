from typing import Optional


def validate_pao_months(value: Optional[int], max_months: int) -> bool:
    if value is None:
        return True

    return 0 < value <= max_months


def escape_like(query: str, escape: str = "\\") -> str:
    """Neutralise % et _ pour une recherche LIKE littérale"""
    return (
        query.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )
