"""Logic for rendering the audit report as an HTML email body."""

from html import escape

from gallery_audit.report_entry import AuditReport


def render_report_html(report: AuditReport) -> str:
    """Render the report as an ordered HTML list, or "" when it is empty."""
    if report.is_empty:
        return ""

    out = ['<html><body style="font-family: Arial"><ol>']
    for entry in report.entries:
        out.append(f"<li><b>{escape(entry.path)}</b><br />Belongs in:<ul>")
        out.extend(f"<li>{escape(folder)}</li>" for folder in entry.belongs_in_folders)
        out.append("</ul>")
        if entry.used_on_pages:
            out.append("Used on:<ul>")
            out.extend(
                f'<li><a href="{escape(url)}">{escape(url)}</a></li>'
                for url in entry.used_on_pages
            )
            out.append("</ul>")
        out.append("</li>")
    out.append("</ol></body></html>")
    return "".join(out)
