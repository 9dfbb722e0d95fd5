"""
Email Lead Monitor.

Polls a Gmail inbox on a fixed interval and, for every unseen message:
- Classifies it as a business lead or not using Gemini
- Drafts a context-appropriate reply on the original thread
- Files the message under a "lead" or "other" label
- Records it so later polling cycles skip it
"""

__version__ = "1.0.0"
