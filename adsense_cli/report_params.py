"""Report request parameters for the AdSense reports endpoint."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

DEFAULT_METRICS = (
    "PAGE_VIEWS",
    "AD_REQUESTS",
    "AD_REQUESTS_COVERAGE",
    "CLICKS",
    "AD_REQUESTS_CTR",
    "COST_PER_CLICK",
    "AD_REQUESTS_RPM",
    "ESTIMATED_EARNINGS",
)

DEFAULT_DIMENSIONS = ("DATE",)

DEFAULT_ORDER_BY = ("+DATE",)

REPORT_WINDOW = timedelta(days=7)


def escape_filter_parameter(text: str) -> str:
    """Escape a value for use inside a report filter clause.

    Backslashes are doubled before commas are escaped, otherwise the
    backslash added for a comma would be escaped again.
    """
    return text.replace("\\", "\\\\").replace(",", "\\,")


def ad_client_filter(reporting_dimension_id: str) -> str:
    """Build the filter clause restricting a report to one ad client."""
    return f"AD_CLIENT_ID=={escape_filter_parameter(reporting_dimension_id)}"


def date_to_fields(param_name: str, day: date) -> dict[str, int]:
    """Split a date into the ``<name>.year/.month/.day`` request fields.

    Example:
        >>> date_to_fields("startDate", date(2024, 3, 5))
        {'startDate.year': 2024, 'startDate.month': 3, 'startDate.day': 5}
    """
    return {
        f"{param_name}.year": day.year,
        f"{param_name}.month": day.month,
        f"{param_name}.day": day.day,
    }


def trailing_week(today: date | None = None) -> tuple[date, date]:
    """Return the (start, end) dates of the seven days ending today."""
    end = today or date.today()
    return end - REPORT_WINDOW, end


def to_method_kwargs(params: dict[str, Any]) -> dict[str, Any]:
    """Map dotted request keys to googleapiclient keyword names.

    The discovery client exposes ``startDate.year`` as ``startDate_year``.
    """
    return {key.replace(".", "_"): value for key, value in params.items()}


@dataclass(frozen=True)
class ReportQuery:
    """An immutable description of one report request."""

    start_date: date
    end_date: date
    filters: tuple[str, ...] = ()
    metrics: tuple[str, ...] = DEFAULT_METRICS
    dimensions: tuple[str, ...] = DEFAULT_DIMENSIONS
    order_by: tuple[str, ...] = DEFAULT_ORDER_BY

    @classmethod
    def for_ad_client(cls, reporting_dimension_id: str, today: date | None = None) -> "ReportQuery":
        """Build the default trailing-week report for one ad client."""
        start, end = trailing_week(today)
        return cls(
            start_date=start,
            end_date=end,
            filters=(ad_client_filter(reporting_dimension_id),),
        )

    def to_params(self) -> dict[str, Any]:
        """Render the request parameters, keyed as the API documents them."""
        params: dict[str, Any] = {
            "dateRange": "CUSTOM",
            "metrics": list(self.metrics),
            "dimensions": list(self.dimensions),
            "orderBy": list(self.order_by),
            "filters": list(self.filters),
        }
        params.update(date_to_fields("startDate", self.start_date))
        params.update(date_to_fields("endDate", self.end_date))
        return params


def report_to_table(response: dict[str, Any]) -> tuple[list[str], list[list[Any]]]:
    """Split a report response into a header row and data rows.

    A response without ``rows`` is an empty table.
    """
    headers = [header["name"] for header in response.get("headers") or []]
    rows = [[cell.get("value") for cell in row.get("cells") or []] for row in response.get("rows") or []]
    return headers, rows
