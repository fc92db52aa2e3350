"""PDF generation for roster output.

This module creates a printable weekly roster showing:
- One row per employee with the shifts held each day
- Mon-Sat and Sunday hour totals per employee
- A grand-total row per day and per bucket
- An optional coverage summary
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from caferoster.domain.models import CoverageSummary, Position, Weekday
from caferoster.reporting.hours import EmployeeHoursRow, WeeklyHoursReport

# Row shading per position (RGB tuples, 0-1 scale)
COLORS = {
    Position.MANAGER: (0.90, 0.85, 0.97),  # Purple
    Position.ASSISTANT_MANAGER: (0.85, 0.90, 0.99),  # Blue
    Position.HEAD_BARISTA: (0.99, 0.93, 0.80),  # Amber
    Position.SENIOR_STAFF: (0.86, 0.96, 0.88),  # Green
    Position.REGULAR_STAFF: (0.95, 0.95, 0.95),  # Gray
    Position.PART_TIME_STAFF: (0.99, 0.88, 0.93),  # Pink
    "total": (0.85, 0.85, 0.85),
}


def _require_reportlab():
    try:
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas, landscape(letter)


class PDFGenerator:
    """Generates printable PDF rosters.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(report, "roster.pdf", title="Week of 6 Jan")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        report: WeeklyHoursReport,
        output_path: Union[str, Path],
        title: str = "Weekly Roster",
        coverage: Optional[CoverageSummary] = None,
    ) -> None:
        """Generate the PDF roster and save to file.

        Args:
            report: The weekly hours report to render.
            output_path: Path to save the PDF.
            title: Heading printed on every page.
            coverage: Coverage summary to print under the table, if any.
        """
        canvas, pagesize = _require_reportlab()

        c = canvas.Canvas(str(output_path), pagesize=pagesize)
        self._draw_report(c, report, title, coverage)
        c.save()

    def generate_to_buffer(
        self,
        report: WeeklyHoursReport,
        title: str = "Weekly Roster",
        coverage: Optional[CoverageSummary] = None,
    ) -> BytesIO:
        """Generate the PDF and return it as a bytes buffer."""
        canvas, pagesize = _require_reportlab()

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=pagesize)
        self._draw_report(c, report, title, coverage)
        c.save()
        buffer.seek(0)
        return buffer

    def _column_layout(self) -> list[tuple[str, float]]:
        """Column headers and widths, filling the usable page width."""
        usable = self.page_width - 2 * self.margin
        name_width = 130
        total_width = 60
        day_width = (usable - name_width - 2 * total_width) / len(Weekday)
        columns = [("Employee", name_width)]
        columns.extend((day.value, day_width) for day in Weekday)
        columns.extend([("Mon-Sat", total_width), ("Sunday", total_width)])
        return columns

    def _draw_report(
        self,
        c,
        report: WeeklyHoursReport,
        title: str,
        coverage: Optional[CoverageSummary],
    ) -> None:
        row_height = 22
        header_height = 60
        footer_height = 40
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        rows_per_page = max(1, int(usable_height / row_height) - 2)

        columns = self._column_layout()
        rows = report.rows
        total_pages = max(1, (len(rows) + rows_per_page - 1) // rows_per_page)

        for page in range(total_pages):
            page_rows = rows[page * rows_per_page : (page + 1) * rows_per_page]
            self._draw_header(c, title, len(rows))

            y = self.page_height - self.margin - header_height
            self._draw_column_headers(c, columns, y, row_height)

            for row in page_rows:
                y -= row_height
                self._draw_employee_row(c, row, columns, y, row_height)

            if page == total_pages - 1:
                y -= row_height
                self._draw_total_row(c, report, columns, y, row_height)
                if coverage is not None:
                    self._draw_coverage(c, coverage, y - 30)

            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page + 1} of {total_pages}",
            )
            c.showPage()

    def _draw_header(self, c, title: str, employee_count: int) -> None:
        """Draw page header with title."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(self.margin, self.page_height - self.margin - 20, title)

        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"Staff: {employee_count}",
        )

    def _draw_column_headers(self, c, columns, y: float, height: float) -> None:
        c.setFont("Helvetica-Bold", 8)
        x = self.margin
        for label, width in columns:
            c.drawString(x + 3, y - height / 2 - 3, label)
            x += width
        c.setStrokeColorRGB(0.3, 0.3, 0.3)
        c.line(self.margin, y - height, self.page_width - self.margin, y - height)

    def _draw_cells(self, c, values: list[str], columns, y: float, height: float) -> None:
        x = self.margin
        for value, (_, width) in zip(values, columns):
            c.setFillColorRGB(0, 0, 0)
            c.drawString(x + 3, y - height / 2 - 3, value)
            x += width
        c.setStrokeColorRGB(0.8, 0.8, 0.8)
        c.line(self.margin, y - height, self.page_width - self.margin, y - height)

    def _draw_employee_row(
        self,
        c,
        row: EmployeeHoursRow,
        columns,
        y: float,
        height: float,
    ) -> None:
        """Draw a single employee's week."""
        c.setFillColorRGB(*COLORS.get(row.employee.position, (1, 1, 1)))
        c.rect(self.margin, y - height, columns[0][1], height, fill=1, stroke=0)

        values = [row.employee.name[:22]]
        values.extend(row.day_label(day) for day in Weekday)
        values.append(f"{row.totals.weekday_hours:.2f}")
        values.append(f"{row.totals.sunday_hours:.2f}")

        c.setFont("Helvetica", 7)
        self._draw_cells(c, values, columns, y, height)

    def _draw_total_row(
        self,
        c,
        report: WeeklyHoursReport,
        columns,
        y: float,
        height: float,
    ) -> None:
        """Draw the grand-total row."""
        c.setFillColorRGB(*COLORS["total"])
        c.rect(
            self.margin, y - height, self.page_width - 2 * self.margin, height,
            fill=1, stroke=0,
        )

        values = ["Grand Total"]
        values.extend(f"{report.day_hours(day):.2f}" for day in Weekday)
        values.append(f"{report.grand_totals.weekday_hours:.2f}")
        values.append(f"{report.grand_totals.sunday_hours:.2f}")

        c.setFont("Helvetica-Bold", 8)
        self._draw_cells(c, values, columns, y, height)

    def _draw_coverage(self, c, coverage: CoverageSummary, y: float) -> None:
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 10)
        c.drawString(self.margin, y, "Coverage")
        c.setFont("Helvetica", 9)
        c.drawString(
            self.margin + 70,
            y,
            f"{coverage.fully_staffed} fully staffed, "
            f"{coverage.partially_staffed} partial, "
            f"{coverage.unstaffed} unstaffed "
            f"({coverage.total} shifts)",
        )
