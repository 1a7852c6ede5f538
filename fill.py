"""
Workbook template filler — CLI entry point.

Usage:
    python fill.py <template.xlsx> <data.json> [--output <out.xlsx>]
                   [--report <report.json>] [--locale <locale>]

The data file holds the scalar parameters and one entry per table data
source:

    {
      "parameters": {"title": "Person Registry", "person": {"name": "Ana"}},
      "tables": {
        "person":  {"name": ["Ana", "Rui"], "age": [21, 25]},
        "courses": [["OpenOffice", "Eclipse"], ["190", "100"]]
      }
    }

Objects become categorical sources (label → values), lists of lists
positional ones (one list per category).
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import dotenv

from data_sources.base import TableDataSource
from data_sources.categorical import CategoricalTableData
from data_sources.positional import PositionalTableData
from dto.fill_result import DocumentFillResult
from exceptions import TemplateError
from template import Template

dotenv.load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Data file
# -------------------------------------------------------------------


def build_data_source(name: str, table_data: Any) -> TableDataSource:
    if isinstance(table_data, dict):
        return CategoricalTableData(table_data)
    if isinstance(table_data, list) and all(isinstance(category, list) for category in table_data):
        return PositionalTableData(table_data)
    raise ValueError(
        f"Table data for '{name}' must be an object of label → values or a list of lists"
    )


def fill_template(
    template_path: str,
    data: Dict[str, Any],
    output_path: str,
    locale: Optional[str] = None,
) -> DocumentFillResult:
    """Fill *template_path* with *data* and write the instance to *output_path*."""
    logger.info("Loading template: %s", template_path)
    template = Template(template_path, locale=locale)

    template.add_parameters(data.get("parameters") or {})
    for name, table_data in (data.get("tables") or {}).items():
        template.add_table_data_source(name, build_data_source(name, table_data))

    return template.save_instance(output_path)


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Fill an Excel workbook template with data from a JSON file.",
    )
    parser.add_argument(
        "template_file",
        help="Path to the .xlsx template",
    )
    parser.add_argument(
        "data_file",
        help="Path to the JSON data file",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output workbook path (default: <template_name>_filled.xlsx)",
    )
    parser.add_argument(
        "-r",
        "--report",
        default=None,
        help="Write the fill report as JSON to this path",
    )
    parser.add_argument(
        "-l",
        "--locale",
        default=None,
        help="Locale used to render localized values (default: $TEMPLATE_LOCALE or en_US)",
    )
    args = parser.parse_args()

    for path in (args.template_file, args.data_file):
        if not os.path.isfile(path):
            logger.error("File not found: %s", path)
            sys.exit(1)

    if args.output:
        output_path = args.output
    else:
        stem = Path(args.template_file).stem
        output_path = f"{stem}_filled.xlsx"

    with open(args.data_file, encoding="utf-8") as f:
        data = json.load(f)

    try:
        report = fill_template(args.template_file, data, output_path, locale=args.locale)
    except (TemplateError, ValueError) as exc:
        logger.error("%s", exc)
        sys.exit(1)

    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            f.write(report.model_dump_json(indent=2, exclude_none=True))
        logger.info("Fill report written to %s", args.report)

    logger.info("Output written to %s", output_path)


if __name__ == "__main__":
    main()
