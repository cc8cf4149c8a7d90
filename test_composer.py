# test_composer.py
from supportdesk.composer import build_email_body, compose, render_subject
from supportdesk.config import create_config

CONFIG = create_config({"custom_fields": [
    {"key": "email", "label": "Email Address", "type": "email"},
    {"key": "phone", "label": "Phone Number", "type": "tel"},
]}, env={})


def test_body_layout():
    ticket = {
        "name": "Ada", "issue": "Login broken", "priority": "High",
        "category": "Billing", "phone": "555-0100", "email": "ada@example.com",
    }
    assert build_email_body(ticket, CONFIG).split("\n") == [
        "New support ticket received via Customer Support",
        "",
        "--- Ticket Details ---",
        "",
        "Name: Ada",
        "Issue: Login broken",
        "Priority: High",
        "Category: Billing",
        "Email Address: ada@example.com",
        "Phone Number: 555-0100",
        "",
        "--- End of Ticket ---",
    ]


def test_omitted_fields_leave_no_lines():
    body = build_email_body({"name": "Ada", "issue": "Login broken", "phone": ""}, CONFIG)
    assert "Priority" not in body
    assert "Category" not in body
    assert "Email Address" not in body
    assert "Phone Number" not in body


def test_subject_placeholders():
    ticket = {"name": "Ada", "issue": "Login broken"}
    assert render_subject("Support Request from {{name}}: {{issue}}", ticket) == \
        "Support Request from Ada: Login broken"
    assert render_subject("{{name}} / {{name}} / {{issue}}{{issue}}", ticket) == \
        "Ada / Ada / Login brokenLogin broken"


def test_subject_without_placeholders_is_unchanged():
    for template in ("New ticket", "{name} and {{ issue }}", ""):
        assert render_subject(template, {"name": "Ada", "issue": "x"}) == template


def test_subject_values_are_not_patterns():
    assert render_subject("{{issue}}", {"name": "Ada", "issue": r"\1 $& {{name}}"}) == r"\1 $& {{name}}"


def test_compose_draft():
    draft = compose({"name": "Ada", "issue": "Login broken", "email": "ada@example.com"}, CONFIG)
    assert draft.to == "support@example.com"
    assert draft.subject == "Support Request from Ada: Login broken"
    assert draft.reply_to == "ada@example.com"
    assert draft.body.startswith("New support ticket received via Customer Support")

    assert compose({"name": "Ada", "issue": "x", "email": ""}, CONFIG).reply_to is None


def test_multiline_values_fold_into_one_subject_line():
    ticket = {"name": "Ada\r\nLovelace", "issue": "Login broken\nSteps: open app\n"}
    subject = render_subject("Support Request from {{name}}: {{issue}}", ticket)
    assert subject == "Support Request from Ada Lovelace: Login broken Steps: open app"
    assert "\n" not in subject and "\r" not in subject


def test_multiline_issue_stays_intact_in_body():
    body = build_email_body({"name": "Ada", "issue": "Login broken\nSteps: open app"}, CONFIG)
    assert "Issue: Login broken\nSteps: open app" in body
