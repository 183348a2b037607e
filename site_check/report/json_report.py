# site_check/report/json_report.py

"""
JSON report for SiteCheck.

Serializes a CheckReport to a file.
"""
import json
from dataclasses import asdict
from pathlib import Path
from site_check.aggregator import CheckReport


def render_json(report: CheckReport, output_path: Path | str, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: CheckReport with the run results
    :param output_path: path of the JSON file
    :param pretty: indent the output by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from site_check.report.json_report import render_json
    report_path = render_json(report, 'reports/crawl.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(report)

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
