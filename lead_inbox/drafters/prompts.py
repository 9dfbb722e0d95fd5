"""
Reply-generation prompts.
"""

LEAD_REPLY_PROMPT = """Generate a professional, friendly draft response to this potential business lead inquiry:

Original Email Subject: {subject}
Original Email: {body}
Sender: {sender}

Create a response that:
- Thanks them for their interest
- Acknowledges their specific inquiry
- Provides helpful information about your services
- Includes a call to action (meeting, call, more info)
- Maintains a professional but warm tone
- Is concise but informative

Do not include placeholder company information - keep it generic but professional.
Return only the email body text; do not include a subject line or additional commentary."""

ACKNOWLEDGE_PROMPT = """Generate a brief, polite response to this email:

Original Email Subject: {subject}
Original Email: {body}
Sender: {sender}

Create a short, courteous response that:
- Acknowledges their message
- Is helpful and professional
- Keeps it brief since this isn't a business inquiry

Return only the email body text; do not include a subject line or additional commentary."""

LEAD_FALLBACK_REPLY = (
    "Thank you for your inquiry about our services. "
    "I'll get back to you shortly with more information."
)

ACKNOWLEDGE_FALLBACK_REPLY = (
    "Thank you for your email. I'll review it and get back to you if needed."
)
