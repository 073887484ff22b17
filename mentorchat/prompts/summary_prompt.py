"""
Prompt for condensing a mentee question before similarity lookup.
"""

SUMMARY_SYSTEM_PROMPT = """You condense questions that mentees ask their mentors.

Summarize the question in at most three short lines.
- Keep the concrete subject (technology, course, career topic) of the question.
- Drop greetings, apologies and personal filler.
- Answer in the language of the question.
- Output only the summary, without a preamble.
"""


def build_summary_prompt(question_text: str) -> str:
    """Build the user prompt for one question."""
    return f"Question:\n{question_text.strip()}"
