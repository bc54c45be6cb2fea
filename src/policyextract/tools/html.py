"""HTML comparison report generation tool."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, select_autoescape

from policyextract.templates.report_template import REPORT_TEMPLATE


if TYPE_CHECKING:
    from policyextract.core.models import ComparisonReport


logger = logging.getLogger(__name__)
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
DEFAULT_TEMPLATE = "report.html"


class HTMLTool:
    """Renders comparison reports to HTML.

    A ``report.html`` file in ``templates_dir`` takes precedence over the
    built-in template.
    """

    name = "html_report"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._templates_dir = templates_dir or TEMPLATES_DIR
        self._env: Environment | None = None

    def _get_env(self) -> Environment:
        if self._env is None:
            self._env = Environment(
                loader=ChoiceLoader([
                    FileSystemLoader(self._templates_dir),
                    DictLoader({DEFAULT_TEMPLATE: REPORT_TEMPLATE}),
                ]),
                autoescape=select_autoescape(["html", "xml"]),
            )
        return self._env

    def render(self, report: ComparisonReport, template_name: str = DEFAULT_TEMPLATE) -> str:
        return self._render(report.to_template_data(), template_name)

    def write(
        self, report: ComparisonReport, output_path: str | Path, template_name: str = DEFAULT_TEMPLATE
    ) -> Path:
        """Render ``report`` and save it, creating parent directories."""
        html_content = self.render(report, template_name)
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html_content, encoding="utf-8")
        logger.info("Wrote comparison report to %s (%d bytes)", output, len(html_content))
        return output.absolute()

    def _render(self, data: dict[str, Any], template_name: str) -> str:
        env = self._get_env()
        template = env.get_template(template_name)
        return template.render(**data)
