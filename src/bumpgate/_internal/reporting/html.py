"""HTML report rendering (Jinja2)."""

from datetime import datetime, timezone

from jinja2 import Environment, PackageLoader, select_autoescape

from bumpgate.contracts import Comparison


def _get_env() -> Environment:
    return Environment(
        loader=PackageLoader("bumpgate", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_html_report(comparison: Comparison) -> str:
    """Renders a self-contained HTML page for one comparison."""
    template = _get_env().get_template("report.html")
    return template.render(
        comparison=comparison,
        old=comparison.old_artifact,
        new=comparison.new_artifact,
        changes=comparison.change_model.changes,
        incompatible_count=len(comparison.change_model.incompatible()),
        required=comparison.change_model.required_bump(),
        suggested=comparison.change_model.suggested_version(),
        generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )
