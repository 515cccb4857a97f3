"""Plain-text and JSON views of the board."""
from __future__ import annotations

from typing import List

from trip_board.records.models import ExtraRow, FamilyRow, FlightRow, ResortRow, ViewRow

from .app import TripBoard
from .sections import SectionStatus, SectionView


def _detail_lines(row: ViewRow) -> List[str]:
    lines: List[str] = []
    if isinstance(row, ResortRow):
        lines.append(f"Origin: {row.origin}")
    elif isinstance(row, FlightRow):
        lines.append(f"Route: {row.route}")
        if row.departure:
            lines.append(f"Departure: {row.departure}")
    elif isinstance(row, ExtraRow) and row.category:
        lines.append(f"Category: {row.category}")
    elif isinstance(row, FamilyRow):
        if row.members:
            lines.append(f"Members: {row.members}")
        if row.resorts:
            lines.append(f"Resorts: {row.resorts}")
        return lines

    lines.append(f"Price: {row.original}")
    lines.append(f"Converted: {row.converted}")
    if isinstance(row, ResortRow):
        lines.append(f"Perks: {row.perks}")
    families = getattr(row, "families", "")
    if families:
        lines.append(f"Families: {families}")
    if row.link:
        lines.append(f"Link: {row.link_label} <{row.link}>")
    if row.notes:
        lines.append(f"Notes: {row.notes}")
    return lines


def render_section(section: SectionView, board: TripBoard) -> str:
    lines = [f"== {section.config.title} =="]
    if section.status in (SectionStatus.PENDING, SectionStatus.LOADING):
        lines.append("Loading…")
    elif section.status is not SectionStatus.READY:
        lines.append(section.message)
    else:
        for row in section.rows:
            mark = "x" if board.is_checked(row.identity) else " "
            lines.append(f"[{mark}] {row.name} ({row.identity})")
            lines.extend(f"      {detail}" for detail in _detail_lines(row))
    return "\n".join(lines)


def render_total(board: TripBoard) -> str:
    code = board.currency.code
    other = "EUR" if code == "USD" else "USD"
    totals = board.totals
    return f"Total ({len(board.ledger)} selected): {totals.format(code)} ({totals.format(other)})"


def render_board(board: TripBoard) -> str:
    blocks = [render_section(section, board) for section in board.sections]
    blocks.append(render_total(board))
    return "\n\n".join(blocks)


def board_to_dict(board: TripBoard) -> dict[str, object]:
    return {
        "display_currency": board.currency.code,
        "sections": [section.to_dict(board.is_checked) for section in board.sections],
        "selected": sorted(board.ledger),
        "totals": board.totals.to_dict(),
    }
