# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Transaction feed: type filters, badges, paging and grouping by date."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from models import TransactionDay, TransactionItem, TransactionPage, TransactionType

TYPE_CODES: dict[TransactionType, frozenset[str]] = {
    TransactionType.TRADES: frozenset(["TR"]),
    TransactionType.SIGNINGS: frozenset(["SGN", "SFA"]),
    TransactionType.DFA: frozenset(["DES", "CLW", "REL"]),
    TransactionType.ROSTER: frozenset(["OPT", "CU", "SC", "RET"]),
}

BADGES: dict[str, str] = {
    "TR": "Trade",
    "SGN": "Signed",
    "SFA": "Signing",
    "DES": "DFA",
    "CLW": "Waivers",
    "REL": "Released",
    "RET": "Retired",
    "OPT": "Optioned",
    "CU": "Recalled",
    "SC": "IL Move",
}


def transaction_badge(transaction: Mapping[str, Any]) -> str:
    code = transaction.get("typeCode") or ""
    return BADGES.get(code) or transaction.get("typeDesc") or code


def filter_transactions(
    transactions: Sequence[Mapping[str, Any]],
    kind: TransactionType | str,
) -> list[Mapping[str, Any]]:
    kind = TransactionType(kind)
    if kind is TransactionType.ALL:
        return list(transactions)
    codes = TYPE_CODES[kind]
    return [t for t in transactions if t.get("typeCode") in codes]


def build_transaction_item(transaction: Mapping[str, Any]) -> TransactionItem:
    person = transaction.get("person") or {}
    return TransactionItem(
        id=transaction.get("id"),
        type_code=transaction.get("typeCode") or "",
        badge=transaction_badge(transaction),
        description=transaction.get("description") or "",
        player_id=person.get("id"),
        player_name=person.get("fullName"),
        from_team=(transaction.get("fromTeam") or {}).get("name"),
        to_team=(transaction.get("toTeam") or {}).get("name"),
    )


def group_by_date(transactions: Sequence[Mapping[str, Any]]) -> list[TransactionDay]:
    """Runs of consecutive transactions sharing a date, in feed order."""
    days: list[TransactionDay] = []
    for transaction in transactions:
        date = transaction.get("date") or transaction.get("effectiveDate") or ""
        if not days or days[-1].date != date:
            days.append(TransactionDay(date=date, transactions=[]))
        days[-1].transactions.append(build_transaction_item(transaction))
    return days


def build_transaction_page(
    transactions: Sequence[Mapping[str, Any]],
    season: int,
    kind: TransactionType | str = TransactionType.ALL,
    offset: int = 0,
    limit: int = 50,
) -> TransactionPage:
    """Filter the feed by type, then return one page of it grouped by date."""
    kind = TransactionType(kind)
    matching = filter_transactions(transactions, kind)
    page = matching[offset:offset + limit]
    return TransactionPage(
        season=season,
        type=kind,
        offset=offset,
        limit=limit,
        total=len(matching),
        has_more=offset + len(page) < len(matching),
        days=group_by_date(page),
    )
