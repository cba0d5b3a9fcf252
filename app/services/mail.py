from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from flask import current_app


def send_mail(to_email, subject, html, text=None):
    """Send one message through SendGrid; returns (status_code, message_id)."""
    client = SendGridAPIClient(api_key=current_app.config['SENDGRID_API_KEY'])
    sender = (current_app.config['MAIL_FROM'], current_app.config['MAIL_FROM_NAME'])
    message = Mail(from_email=sender, to_emails=to_email, subject=subject,
                   html_content=html, plain_text_content=text)
    resp = client.send(message)
    headers = getattr(resp, 'headers', None) or {}
    return resp.status_code, headers.get('X-Message-Id')
