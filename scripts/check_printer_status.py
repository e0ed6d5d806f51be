"""
Check printer fleet status - maintenance due/overdue and the next recommended printer.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.maintenance import MaintenanceStatus
from domain.printer import PrinterStatus, recommend_printer
from repositories.printer_repository import list_printers


def check_printer_status():
    """Print a maintenance and availability summary of all printers."""

    printers = list_printers()
    assessments = [(printer, printer.maintenance()) for printer in printers]

    by_status = {status: 0 for status in PrinterStatus}
    for printer in printers:
        by_status[printer.status] += 1

    due = [p for p, a in assessments if a.status is MaintenanceStatus.DUE]
    overdue = [p for p, a in assessments if a.status is MaintenanceStatus.OVERDUE]

    print("=" * 50)
    print("PRINTER STATUS")
    print("=" * 50)
    print(f"Total printers:            {len(printers)}")
    for status, count in by_status.items():
        print(f"{status.value + ':':<27}{count}")
    print(f"Maintenance due:           {len(due)}")
    print(f"Maintenance overdue:       {len(overdue)}")
    print("=" * 50)

    print("\nMaintenance detail:")
    print("-" * 50)
    for printer, assessment in assessments:
        if assessment.status is MaintenanceStatus.OK:
            continue
        print(
            f"{printer.name}: {assessment.status.value} "
            f"({assessment.days_since_maintenance} days, {printer.hours_printed:.0f} h)"
        )
    print("-" * 50)

    recommended = recommend_printer(printers)
    if recommended is None:
        print("\nNo printer can take new jobs (all in maintenance or offline).")
    else:
        print(f"\nNext job goes to: {recommended.name} ({recommended.status.value}, queue {recommended.job_queue_length})")


if __name__ == "__main__":
    check_printer_status()
