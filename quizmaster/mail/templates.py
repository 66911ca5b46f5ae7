from datetime import datetime
from typing import Any, Callable, Dict, Tuple

from quizmaster.time_util import utcnow

# Email templates
EMAIL_CSS_STYLES = """
    body {
        font-family: Arial, sans-serif;
        background-color: #f3f4f6;
        color: #1f2937;
        padding: 20px;
    }
    .container {
        max-width: 600px;
        margin: 0 auto;
        background-color: #ffffff;
        border-radius: 10px;
        padding: 30px;
        box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);
    }
    .stats {
        width: 100%;
        border-collapse: separate;
        border-spacing: 12px;
        margin: 20px 0;
    }
    .stat {
        background-color: #eff6ff;
        border-radius: 8px;
        padding: 16px;
        text-align: center;
    }
    .stat h3 {
        margin: 0 0 5px 0;
        font-size: 22px;
        color: #1e40af;
    }
    .stat p {
        margin: 0;
        color: #3b82f6;
        font-weight: bold;
    }
    .button {
        display: inline-block;
        margin-top: 16px;
        padding: 14px 28px;
        background: #4f46e5;
        color: #ffffff;
        border-radius: 8px;
        text-decoration: none;
        font-weight: bold;
    }
    .footer {
        margin-top: 30px;
        font-size: 14px;
        color: #9ca3af;
        text-align: center;
    }
    a {
        color: #6b7280;
    }
"""


def _create_email_template(
    title: str,
    subtitle: str,
    main_content: str,
    link: str,
    button_text: str,
    footer: str = "",
) -> str:
    """
    Create a standardized QuizMaster email HTML layout.

    Args:
        title: Email heading
        subtitle: Line under the heading
        main_content: Body HTML placed between the heading and the button
        link: Target of the action button
        button_text: Text for the action button
        footer: Extra footer HTML

    Returns:
        str: Complete HTML email
    """
    current_year = datetime.now().year

    return f"""\
<html>
  <head>
    <style>
{EMAIL_CSS_STYLES}
    </style>
  </head>
  <body>
    <div class="container">
      <h1>{title}</h1>
      <p>{subtitle}</p>

      {main_content}

      <div style="text-align:center;">
        <a class="button" href="{link}">{button_text}</a>
      </div>
      <div class="footer">
        {footer}
        <p>&copy; {current_year} QuizMaster. All rights reserved.</p>
      </div>
    </div>
  </body>
</html>
"""


def _stat_cell(value: Any, label: str) -> str:
    return f'<td class="stat"><h3>{value}</h3><p>{label}</p></td>'


def render_daily_reminder(data: Dict[str, Any], frontend_url: str) -> Tuple[str, str]:
    username = data.get("username") or "there"
    available_quizzes = data.get("available_quizzes") or 0

    main_content = f"""
      <h2>Hi {username}!</h2>
      <p>Don't let your learning streak break! We have <strong>{available_quizzes}</strong>
      quizzes waiting for you. Take a few minutes today to challenge yourself.</p>
      <ul>
        <li>Reinforce your learning</li>
        <li>Track your progress</li>
        <li>Discover new topics</li>
      </ul>
    """
    body_html = _create_email_template(
        title="QuizMaster",
        subtitle="Your Daily Learning Reminder",
        main_content=main_content,
        link=f"{frontend_url}/dashboard",
        button_text="Start Learning Now",
        footer=f'<p>Keep learning, keep growing!</p><p><a href="{frontend_url}/settings">Unsubscribe</a></p>',
    )
    return "Daily Quiz Reminder - Keep Learning with QuizMaster!", body_html


def render_weekly_report(data: Dict[str, Any], frontend_url: str) -> Tuple[str, str]:
    username = data.get("username") or "there"
    stats = data.get("stats") or {}

    main_content = f"""
      <h2>Great work this week, {username}!</h2>
      <table class="stats"><tr>
        {_stat_cell(stats.get("quizzes_completed") or 0, "Quizzes Completed")}
        {_stat_cell(f'{stats.get("average_score") or 0}%', "Average Score")}
      </tr></table>
    """
    body_html = _create_email_template(
        title="Weekly Report",
        subtitle="Your Learning Progress",
        main_content=main_content,
        link=f"{frontend_url}/history",
        button_text="View Full Report",
    )
    return "Your Weekly Quiz Performance Report", body_html


def render_admin_daily_report(data: Dict[str, Any], frontend_url: str) -> Tuple[str, str]:
    report_date = data.get("report_date") or utcnow().date().isoformat()

    main_content = f"""
      <h2>System Status - {report_date}</h2>
      <table class="stats">
        <tr>
          {_stat_cell(data.get("total_users") or 0, "Total Users")}
          {_stat_cell(data.get("total_attempts") or 0, "Total Attempts")}
        </tr>
        <tr>
          {_stat_cell(data.get("today_attempts") or 0, "Today's Attempts")}
          {_stat_cell(f'{data.get("average_score") or 0}%', "Avg Score")}
        </tr>
      </table>
    """
    body_html = _create_email_template(
        title="Admin Report",
        subtitle="Daily System Overview",
        main_content=main_content,
        link=f"{frontend_url}/admin",
        button_text="View Admin Dashboard",
    )
    return "QuizMaster Daily Admin Report", body_html


EMAIL_TEMPLATES: Dict[str, Callable[[Dict[str, Any], str], Tuple[str, str]]] = {
    "daily_reminder": render_daily_reminder,
    "weekly_report": render_weekly_report,
    "admin_daily_report": render_admin_daily_report,
}


def render_email(template: str, data: Dict[str, Any], frontend_url: str) -> Tuple[str, str]:
    """
    Render a named template into a (subject, html) pair.

    Raises:
        ValueError: If the template name is not one of EMAIL_TEMPLATES.
    """
    renderer = EMAIL_TEMPLATES.get(template)
    if renderer is None:
        raise ValueError(f"Unknown email template: {template}")
    return renderer(data, frontend_url)
