"""
Classification prompt for business lead emails.
"""

PROMPT = """Analyze this email to determine if the sender is inquiring about business services, products, or is a potential lead.

Subject: {subject}
Body:
{body}

Consider these as potential lead indicators:
- Asking about services, products, pricing
- Requesting quotes or information
- Business inquiries
- Partnership opportunities
- Questions about capabilities

Exclude:
- Personal emails
- Spam/promotional emails
- Newsletters
- Social notifications
- Internal communications

Return ONLY valid JSON (no markdown, no explanation):
{{
  "isLead": true/false (true if this appears to be a service inquiry or potential business lead),
  "confidence": number between 0 and 1 (how confident you are),
  "reason": "brief explanation of why this is/isn't a lead",
  "keywords": ["relevant", "keywords", "found"]
}}"""
