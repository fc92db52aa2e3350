"""Command-line interface for the café roster tool."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from caferoster.domain.models import (
    Availability,
    CoverageSummary,
    Employee,
    Position,
    Shift,
    ShiftTemplate,
    TimeInterval,
    Weekday,
)
from caferoster.output.pdf_generator import PDFGenerator
from caferoster.reporting.hours import WeeklyHoursReport
from caferoster.service import RosterService
from caferoster.storage.json_store import JsonFileRepository
from caferoster.storage.repository import InMemoryRepository, RosterRepository
from caferoster.validation.validator import ValidationResult

logger = logging.getLogger(__name__)


def create_sample_staff(
    count: int = 8,
) -> tuple[list[Employee], list[Shift], list[Availability]]:
    """Create sample employees, shifts and availability for a demo week.

    Args:
        count: Number of employees to create.
    """
    names = [
        "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry",
        "Ivy", "Jack", "Kate", "Leo", "Mia", "Noah", "Olivia", "Paul",
    ]
    # Most cafés run one manager, a couple of senior staff and a regular crew
    positions = [
        Position.MANAGER,
        Position.HEAD_BARISTA,
        Position.SENIOR_STAFF,
        Position.REGULAR_STAFF,
        Position.REGULAR_STAFF,
        Position.PART_TIME_STAFF,
        Position.ASSISTANT_MANAGER,
        Position.PART_TIME_STAFF,
    ]

    employees = []
    availabilities = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name}{i // len(names) + 1}"
        employee = Employee(
            id=f"E{i + 1:03d}",
            name=name,
            position=positions[i % len(positions)],
        )
        employees.append(employee)

        for day in Weekday:
            if i % 4 == 0:
                window = TimeInterval.parse("06:00", "15:00")  # Openers
            elif i % 4 == 1:
                window = TimeInterval.parse("11:00", "20:00")  # Closers
            else:
                window = TimeInterval.parse("06:00", "20:00")  # Flexible

            # Everyone takes one fixed day off
            is_available = day.index != i % 7
            availabilities.append(
                Availability(
                    employee_id=employee.id,
                    day=day,
                    window=window,
                    is_available=is_available,
                )
            )

    templates = [
        ShiftTemplate("Opening", "Everyday", "06:30", "14:30",
                      required_position=Position.MANAGER, id="open-mgr"),
        ShiftTemplate("Morning Bar", "Everyday", "07:00", "12:00",
                      min_staff_count=2, id="morning"),
        ShiftTemplate("Head Barista", "Everyday", "07:00", "15:30",
                      required_position=Position.HEAD_BARISTA, id="head"),
        ShiftTemplate("Afternoon", "Everyday", "12:00", "19:30",
                      min_staff_count=2, id="afternoon"),
        ShiftTemplate("Weekend Rush", "Saturday", "09:00", "13:00",
                      min_staff_count=2, id="sat-rush"),
    ]
    shifts = [shift for template in templates for shift in template.expand()]

    return employees, shifts, availabilities


def print_generation_summary(stats: dict) -> None:
    print(f"  Shifts: {stats['total_shifts']}")
    print(f"  Roster entries: {stats['total_entries']}")
    print(f"  Coverage: {stats['fully_staffed']} full, "
          f"{stats['partially_staffed']} partial, {stats['unstaffed']} unstaffed")


def print_validation(result: ValidationResult) -> None:
    if result.is_valid:
        print("\n  Validation: PASSED")
    else:
        print(f"\n  Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    if result.warnings:
        print(f"\n  Warnings ({len(result.warnings)}):")
        for warning in result.warnings[:3]:
            print(f"    - {warning}")
        if len(result.warnings) > 3:
            print(f"    ... and {len(result.warnings) - 3} more warnings")


def print_hours(report: WeeklyHoursReport) -> None:
    """Print the weekly hours table."""
    header = f"  {'Employee':<20}" + "".join(f"{d.value[:3]:>13}" for d in Weekday)
    print(header + f"{'Mon-Sat':>9}{'Sun':>7}")
    for row in report.rows:
        line = f"  {row.employee.name[:20]:<20}"
        line += "".join(f"{row.day_label(d):>13}" for d in Weekday)
        line += f"{row.totals.weekday_hours:>9.2f}{row.totals.sunday_hours:>7.2f}"
        print(line)

    totals = f"  {'Grand Total':<20}"
    totals += "".join(f"{report.day_hours(d):>13.2f}" for d in Weekday)
    totals += (f"{report.grand_totals.weekday_hours:>9.2f}"
               f"{report.grand_totals.sunday_hours:>7.2f}")
    print(totals)


def write_pdf(
    report: WeeklyHoursReport,
    output_path: str,
    coverage: Optional[CoverageSummary] = None,
) -> None:
    print(f"\nGenerating PDF: {output_path}")
    PDFGenerator().generate(report, output_path, coverage=coverage)
    print("  PDF created successfully!")


def run_generate(
    repository: RosterRepository,
    output_path: Optional[str] = None,
    show_hours: bool = True,
) -> None:
    """Generate a roster over ``repository`` and print the results."""
    service = RosterService(repository)
    _, stats = service.generate_with_stats()

    print("\nRoster generated")
    print_generation_summary(stats)
    print_validation(service.validate())

    report = service.hours_report()
    if show_hours:
        print("\nHours:")
        print_hours(report)

    if output_path:
        _, summary = service.coverage()
        write_pdf(report, output_path, summary)


def run_hours(repository: RosterRepository, output_path: Optional[str] = None) -> None:
    """Print hour totals for the stored roster."""
    service = RosterService(repository)
    report = service.hours_report()
    print_hours(report)
    if output_path:
        _, summary = service.coverage()
        write_pdf(report, output_path, summary)


def run_demo(employee_count: int = 8, output_path: Optional[str] = None) -> None:
    """Run a demo roster generation."""
    print(f"Generating demo roster for {employee_count} employees...")
    employees, shifts, availabilities = create_sample_staff(employee_count)
    run_generate(InMemoryRepository(employees, shifts, availabilities), output_path)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Café Roster - Staff Scheduling Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                          Run demo with 8 employees
  %(prog)s demo --count 12 -o week.pdf   Demo with PDF output

  %(prog)s generate cafe.json            Generate and print a roster
  %(prog)s generate cafe.json --save     Generate and store it in the file
  %(prog)s hours cafe.json               Print hours for the stored roster
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine decisions",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    demo_parser = subparsers.add_parser("demo", help="Run demo roster generation")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=8,
        help="Number of employees to generate (default: 8)",
    )
    demo_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output PDF file path",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a roster from a JSON data file",
    )
    generate_parser.add_argument("data", help="JSON data file")
    generate_parser.add_argument(
        "--save", "-s",
        action="store_true",
        help="Write the generated roster back to the data file",
    )
    generate_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output PDF file path",
    )

    hours_parser = subparsers.add_parser(
        "hours",
        help="Print hour totals for the roster stored in a JSON data file",
    )
    hours_parser.add_argument("data", help="JSON data file")
    hours_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output PDF file path",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "demo":
        run_demo(args.count, args.output)
        return 0
    elif args.command in ("generate", "hours"):
        if not Path(args.data).is_file():
            logger.error("Data file not found: %s", args.data)
            return 2
        try:
            autosave = args.command == "generate" and args.save
            repository = JsonFileRepository(args.data, autosave=autosave)
        except (OSError, ValueError, KeyError) as e:
            logger.error("Could not load %s: %s", args.data, e)
            return 2

        if args.command == "generate":
            run_generate(repository, args.output)
        else:
            run_hours(repository, args.output)
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
