"""HTML templates for artist notifications"""

from dataclasses import dataclass
from html import escape
from typing import Iterable, Optional

from ...domain.enums import EmailKind

_STYLE = """
            body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .header {{ background: {gradient}; color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }}
            .content {{ background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; }}
            .panel {{ background: white; padding: 20px; border-radius: 8px; margin: 20px 0; }}
            .footer {{ text-align: center; margin-top: 30px; color: #666; font-size: 14px; }}
"""

_PURPLE = "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"
_GREEN = "linear-gradient(135deg, #28a745 0%, #20c997 100%)"
_GREY = "linear-gradient(135deg, #6c757d 0%, #495057 100%)"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


def _page(title: str, gradient: str, header: str, body: str, brand: str) -> str:
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <title>{escape(title)}</title>
        <style>{_STYLE.format(gradient=gradient)}</style>
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1>🎵 {escape(brand)}</h1>
                <h2>{header}</h2>
            </div>
            <div class="content">
                {body}
                <p>Best regards,<br>The {escape(brand)} Team</p>
            </div>
            <div class="footer">
                <p>This is an automated message. Please do not reply to this email.</p>
            </div>
        </div>
    </body>
    </html>
    """


def _notes(feedback: Optional[str], admin_notes: Optional[str]) -> str:
    parts = []
    if feedback:
        parts.append(f'<div class="panel"><h3>Feedback</h3><p>{escape(feedback)}</p></div>')
    if admin_notes:
        parts.append(f"<p><strong>Additional Notes:</strong> {escape(admin_notes)}</p>")
    return "".join(parts)


def render_confirmation(brand: str, artist_name: str, submission_id: str, tracks: Iterable[dict]) -> RenderedEmail:
    items = []
    for track in tracks:
        details = ", ".join(
            part for part in (
                f"{track['bpm']} BPM" if track.get("bpm") else "",
                track.get("key") or "",
            ) if part
        )
        suffix = f" ({escape(details)})" if details else ""
        items.append(
            f"<li><strong>{escape(track['title'])}</strong> - {escape(track['genre'])}{suffix}</li>"
        )
    body = f"""
                <p>Hi {escape(artist_name)},</p>
                <p>Thank you for submitting your music demo to {escape(brand)}! We're excited to listen to your tracks.</p>
                <div class="panel">
                    <h3>Your Submitted Tracks:</h3>
                    <ul>{''.join(items)}</ul>
                    <p><strong>Submission ID:</strong> {escape(submission_id)}</p>
                </div>
                <p>Our A&amp;R team will review your submission within the next 7-14 days.</p>
    """
    return RenderedEmail(
        subject=f"Your Demo Submission Has Been Received - {brand}",
        html=_page("Submission Confirmation", _PURPLE, "Submission Received!", body, brand),
    )


def render_approval(brand: str, artist_name: str, submission_id: str,
                    feedback: Optional[str] = None, admin_notes: Optional[str] = None) -> RenderedEmail:
    body = f"""
                <p>Hi {escape(artist_name)},</p>
                <p>Great news! Your demo submission has been <strong>approved</strong> by our A&amp;R team.</p>
                {_notes(feedback, admin_notes)}
                <p><strong>Submission ID:</strong> {escape(submission_id)}</p>
                <p>We'll be in touch shortly about next steps.</p>
    """
    return RenderedEmail(
        subject=f"🎉 Congratulations! Your Demo Has Been Approved - {brand}",
        html=_page("Demo Approved", _GREEN, "Your Demo Has Been Approved!", body, brand),
    )


def render_rejection(brand: str, artist_name: str, submission_id: str,
                     feedback: Optional[str] = None, admin_notes: Optional[str] = None) -> RenderedEmail:
    body = f"""
                <p>Hi {escape(artist_name)},</p>
                <p>Thank you for sharing your music with us. After careful review, we've decided not to move forward with this submission.</p>
                {_notes(feedback, admin_notes)}
                <p><strong>Submission ID:</strong> {escape(submission_id)}</p>
                <p>Please keep creating and don't hesitate to submit again in the future.</p>
    """
    return RenderedEmail(
        subject=f"Demo Submission Update - {brand}",
        html=_page("Submission Update", _GREY, "Submission Update", body, brand),
    )


def render_test(brand: str) -> RenderedEmail:
    return RenderedEmail(
        subject=f"{brand} Email Service Test",
        html=f"<h1>Email service is working!</h1><p>This is a test email from {escape(brand)}.</p>",
    )


def render(kind: EmailKind, brand: str, args: dict) -> RenderedEmail:
    """Pick the template for ``kind``; missing keys raise KeyError"""
    if kind == EmailKind.CONFIRMATION:
        return render_confirmation(brand, args["artist_name"], args["submission_id"], args.get("tracks", []))
    if kind == EmailKind.APPROVAL:
        return render_approval(brand, args["artist_name"], args["submission_id"],
                               args.get("feedback"), args.get("admin_notes"))
    if kind == EmailKind.REJECTION:
        return render_rejection(brand, args["artist_name"], args["submission_id"],
                                args.get("feedback"), args.get("admin_notes"))
    return render_test(brand)
