"""
Email templates for Grantees.

All templates use inline CSS for maximum email client compatibility.
Each template function returns (subject, html_body, text_body).
"""

from __future__ import annotations

from html import escape

# Color constants
BG_PAGE = "#f4f4f5"
BG_CARD = "#ffffff"
BG_SURFACE = "#f8fafc"
EMERALD = "#10b981"
TEAL = "#0d9488"
TEXT_PRIMARY = "#1a1a2e"
TEXT_SECONDARY = "#64748b"
TEXT_MUTED = "#94a3b8"

NEXT_STEPS = (
    "Complete your builder profile",
    "Get personalized grant matches",
    "Track deadlines and applications",
)


def _base_layout(header: str, content: str, app_name: str = "Grantees") -> str:
    """Wrap content in the base email layout."""
    return f"""\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{app_name}</title>
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: {TEXT_PRIMARY}; margin: 0; padding: 0; background-color: {BG_PAGE};">
    <div style="max-width: 600px; margin: 0 auto; padding: 40px 20px;">
        <div style="background: linear-gradient(135deg, {EMERALD} 0%, {TEAL} 100%); border-radius: 16px 16px 0 0; padding: 40px 30px; text-align: center;">
            <h1 style="color: white; margin: 0; font-size: 28px; font-weight: 700;">{header}</h1>
        </div>
        <div style="background: {BG_CARD}; border-radius: 0 0 16px 16px; padding: 40px 30px; box-shadow: 0 4px 24px rgba(0,0,0,0.1);">
            {content}
        </div>
        <div style="text-align: center; padding: 24px; color: {TEXT_MUTED}; font-size: 12px;">
            <p style="margin: 0;">&copy; {app_name}. Built for builders.</p>
        </div>
    </div>
</body>
</html>"""


def welcome_email(display_name: str | None = None, dashboard_url: str = "") -> tuple[str, str, str]:
    """
    Welcome email sent after an account is created.

    Args:
        display_name: Greeting name, if the user has set one.
        dashboard_url: Link to the builder dashboard; omitted when empty.
    """
    subject = "Welcome to Grantees! \U0001f389"
    greeting = f"Welcome to Grantees, {escape(display_name)}" if display_name else "Welcome to Grantees"
    items = "\n".join(
        f'<li style="margin-bottom: 8px;">{step}</li>' for step in NEXT_STEPS
    )
    link = (
        f'<p style="margin: 24px 0 0 0;"><a href="{escape(dashboard_url)}" '
        f'style="color: {EMERALD}; font-weight: 600;">Open your dashboard</a></p>'
        if dashboard_url
        else ""
    )
    content = f"""\
<h2 style="color: {TEXT_PRIMARY}; margin: 0 0 16px 0; font-size: 22px;">{greeting}</h2>
<p style="color: {TEXT_SECONDARY}; margin: 0 0 24px 0;">
    You've just joined the smartest way to discover grants, travel funding, hackathons, and programs for Web3 builders.
</p>
<div style="background: {BG_SURFACE}; border-radius: 12px; padding: 24px; margin: 24px 0;">
    <h3 style="color: {TEXT_PRIMARY}; margin: 0 0 12px 0; font-size: 16px;">What's next?</h3>
    <ul style="color: {TEXT_SECONDARY}; margin: 0; padding-left: 20px;">
        {items}
    </ul>
</div>{link}
<p style="color: {TEXT_MUTED}; font-size: 14px; margin: 32px 0 0 0;">
    Questions? Reply to this email or join our community.
</p>"""
    html_body = _base_layout("Account Created Successfully! \U0001f389", content)

    text_lines = [
        greeting,
        "",
        "You've just joined the smartest way to discover grants, travel funding, "
        "hackathons, and programs for Web3 builders.",
        "",
        "What's next?",
        *[f"- {step}" for step in NEXT_STEPS],
    ]
    if dashboard_url:
        text_lines += ["", f"Open your dashboard: {dashboard_url}"]
    text_lines += ["", "Questions? Reply to this email or join our community."]
    return subject, html_body, "\n".join(text_lines)
