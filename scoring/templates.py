"""Bulk prediction CSV template shipped with the package."""

from importlib import resources

TEMPLATE_FILENAME = "bulk-prediction-template.csv"


def template_csv() -> str:
    """Return the bulk prediction template as CSV text."""
    return resources.files("scoring").joinpath("data").joinpath(TEMPLATE_FILENAME).read_text()


def template_columns() -> list[str]:
    """Header fields of the template."""
    return template_csv().splitlines()[0].split(",")
