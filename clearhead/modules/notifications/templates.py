from string import Template

BOOKING_CONFIRMATION = "booking_confirmation"
BOOKING_REMINDER = "booking_reminder"
WELCOME = "welcome"

KINDS = (BOOKING_CONFIRMATION, BOOKING_REMINDER, WELCOME)

# (subject, html body); placeholders use string.Template syntax
DEFAULTS: dict[str, tuple[str, str]] = {
    BOOKING_CONFIRMATION: (
        "Session Confirmed - ${provider_name}",
        """<div style="font-family: 'Inter', sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #4F46E5;">ClearHeadSpace</h1>
  <h2>Session Confirmed!</h2>
  <p>Your session has been successfully booked.</p>
  <ul>
    <li>With: ${provider_name}</li>
    <li>Date: ${date_long}</li>
    <li>Time: ${time}</li>
    <li>Duration: ${duration} minutes</li>
    <li>Session Type: ${session_format}</li>
    <li>Amount: $$${amount}</li>
  </ul>
  <p>You can join from your dashboard up to 15 minutes before the session starts: <a href="${meeting_link}">${meeting_link}</a></p>
  <p>Sessions can be cancelled up to 24 hours in advance for a full refund. Reschedules need at least 4 hours notice.</p>
  <p><a href="${frontend_url}/bookings">View My Sessions</a></p>
</div>""",
    ),
    BOOKING_REMINDER: (
        "Session Reminder - Tomorrow at ${time}",
        """<div style="font-family: 'Inter', sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #4F46E5;">ClearHeadSpace</h1>
  <h2>Session Reminder</h2>
  <p>Your session with ${provider_name} is tomorrow.</p>
  <p><strong>Date:</strong> ${date_long}<br><strong>Time:</strong> ${time}<br><strong>Duration:</strong> ${duration} minutes</p>
  <p><a href="${frontend_url}/call/${booking_id}">Join Session</a> | <a href="${frontend_url}/bookings">Manage My Sessions</a></p>
</div>""",
    ),
    WELCOME: (
        "Welcome to ClearHeadSpace!",
        """<div style="font-family: 'Inter', sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #4F46E5;">Welcome to ClearHeadSpace!</h1>
  <h2>Welcome, ${first_name}!</h2>
  <p>We're so glad you're here. Complete your profile, browse our therapists and book your first session.</p>
  <p><a href="${frontend_url}/dashboard">Go to Dashboard</a></p>
  <p>If you're in crisis, call 988 (Suicide &amp; Crisis Lifeline) or text HOME to 741741.</p>
</div>""",
    ),
}

def render(subject: str | None, body: str, variables: dict) -> tuple[str, str]:
    return (
        Template(subject or "").safe_substitute(variables),
        Template(body or "").safe_substitute(variables),
    )
