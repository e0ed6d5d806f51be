"""
Tests for `domain/printer.py`.

Covers contract rules:
- Maintenance and Offline printers are never recommended.
- Idle printers beat non-idle ones; then shortest job queue wins.
- Ties keep input order.
- No candidates yields None.
"""

from __future__ import annotations

from datetime import date

import pytest

from domain.printer import PrinterState, PrinterStatus, rank_printers, recommend_printer

LAST_SERVICE = date(2025, 6, 1)


def _printer(id: int, status: PrinterStatus, queue: int, hours: float = 0.0) -> PrinterState:
    return PrinterState(
        id=id,
        status=status,
        job_queue_length=queue,
        hours_printed=hours,
        last_maintenance_date=LAST_SERVICE,
        name=f"Printer {id}",
    )


def test_idle_with_shortest_queue_wins() -> None:
    """Printing q2, Idle q5, Idle q1, Maintenance q0 recommends printer 3."""

    printers = [
        _printer(1, PrinterStatus.PRINTING, 2),
        _printer(2, PrinterStatus.IDLE, 5),
        _printer(3, PrinterStatus.IDLE, 1),
        _printer(4, PrinterStatus.MAINTENANCE, 0),
    ]

    recommended = recommend_printer(printers)

    assert recommended is not None
    assert recommended.id == 3


def test_no_schedulable_printers_returns_none() -> None:
    """Offline and Maintenance printers only: no recommendation, not an error."""

    printers = [_printer(1, PrinterStatus.OFFLINE, 0), _printer(2, PrinterStatus.MAINTENANCE, 0)]

    assert recommend_printer(printers) is None


def test_empty_fleet_returns_none() -> None:
    assert recommend_printer([]) is None
    assert rank_printers([]) == []


def test_non_idle_printer_recommended_when_no_idle_available() -> None:
    printers = [_printer(1, PrinterStatus.PRINTING, 4), _printer(2, PrinterStatus.PRINTING, 1)]

    assert recommend_printer(printers).id == 2  # type: ignore[union-attr]


def test_idle_beats_shorter_queue_on_busy_printer() -> None:
    printers = [_printer(1, PrinterStatus.PRINTING, 0), _printer(2, PrinterStatus.IDLE, 9)]

    assert recommend_printer(printers).id == 2  # type: ignore[union-attr]


def test_ties_keep_input_order() -> None:
    """Verify equal (status, queue) keys are resolved by input order."""

    first = [_printer(7, PrinterStatus.IDLE, 2), _printer(3, PrinterStatus.IDLE, 2)]
    second = list(reversed(first))

    assert recommend_printer(first).id == 7  # type: ignore[union-attr]
    assert recommend_printer(second).id == 3  # type: ignore[union-attr]


def test_rank_printers_orders_and_excludes() -> None:
    printers = [
        _printer(1, PrinterStatus.PRINTING, 1),
        _printer(2, PrinterStatus.OFFLINE, 0),
        _printer(3, PrinterStatus.IDLE, 4),
        _printer(4, PrinterStatus.PRINTING, 0),
        _printer(5, PrinterStatus.IDLE, 0),
    ]

    assert [p.id for p in rank_printers(printers)] == [5, 3, 4, 1]


def test_is_schedulable_by_status() -> None:
    assert _printer(1, PrinterStatus.IDLE, 0).is_schedulable
    assert _printer(1, PrinterStatus.PRINTING, 0).is_schedulable
    assert not _printer(1, PrinterStatus.MAINTENANCE, 0).is_schedulable
    assert not _printer(1, PrinterStatus.OFFLINE, 0).is_schedulable


def test_maintenance_uses_printer_counters() -> None:
    printer = _printer(1, PrinterStatus.IDLE, 0, hours=610)

    assessment = printer.maintenance(today=date(2025, 6, 10))

    assert assessment.days_since_maintenance == 9
    assert assessment.is_overdue is True


def test_negative_counters_are_rejected() -> None:
    with pytest.raises(ValueError):
        _printer(1, PrinterStatus.IDLE, -1)
    with pytest.raises(ValueError):
        _printer(1, PrinterStatus.IDLE, 0, hours=-5)
