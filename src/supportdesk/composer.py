# src/supportdesk/composer.py
from typing import Any, Mapping

from .models import AppConfig, EmailDraft


def _single_line(value: Any) -> str:
    return " ".join(str(value).splitlines())


def render_subject(template: str, ticket: Mapping[str, Any]) -> str:
    """
    Replace every literal {{name}} / {{issue}} token in the template.
    Substituted values are folded onto one line: the result is a mail header.
    """
    return (
        template
        .replace("{{name}}", _single_line(ticket.get("name", "")))
        .replace("{{issue}}", _single_line(ticket.get("issue", "")))
    )


def build_email_body(ticket: Mapping[str, Any], config: AppConfig) -> str:
    """Plain-text ticket body. Absent or empty optional values get no line."""
    lines = [
        f"New support ticket received via {config.brand.name}",
        "",
        "--- Ticket Details ---",
        "",
        f"Name: {ticket['name']}",
        f"Issue: {ticket['issue']}",
    ]

    if ticket.get("priority"):
        lines.append(f"Priority: {ticket['priority']}")
    if ticket.get("category"):
        lines.append(f"Category: {ticket['category']}")

    for field in config.custom_fields:
        value = ticket.get(field.key)
        if value:
            lines.append(f"{field.label}: {value}")

    lines.extend(["", "--- End of Ticket ---"])
    return "\n".join(lines)


def compose(ticket: Mapping[str, Any], config: AppConfig) -> EmailDraft:
    return EmailDraft(
        to=config.support_email,
        subject=render_subject(config.email_subject_template, ticket),
        body=build_email_body(ticket, config),
        reply_to=ticket.get("email") or None,
    )
