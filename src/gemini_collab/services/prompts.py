"""Prompt construction for the collaborative brainstorming tools."""

from typing import Sequence

from ..models.session import BrainstormRound, PromptContext

HISTORY_FIELD_LIMIT = 500
TRUNCATION_MARKER = "..."


def truncate(text: str, limit: int = HISTORY_FIELD_LIMIT) -> str:
    """Cut a history field to ``limit`` characters and append the marker."""
    return f"{text[:limit]}{TRUNCATION_MARKER}"


def render_transcript(history: Sequence[BrainstormRound]) -> str:
    """Render prior rounds with each field truncated independently."""
    blocks = [
        f"""
Round {entry.round_number}:
- Claude: {truncate(entry.caller_input)}
- Gemini: {truncate(entry.model_response)}
"""
        for entry in history
    ]
    return "\n".join(blocks)


def build_initial_prompt(problem: str) -> str:
    return f"""
You are participating in a collaborative brainstorming session with Claude, another AI assistant.
Together, you will create a plan to address the following request:

---
{problem}
---

Please provide your initial thoughts, considering:
1. How you would approach this problem
2. What information or resources you might need
3. Any challenges you anticipate
4. The steps you would take to implement a solution

Remember, this is the first round of a collaborative discussion, so focus on sharing your initial perspective rather than a complete solution.
"""


def build_collaboration_prompt(context: PromptContext) -> str:
    has_history = len(context.history) > 0
    summary = (
        f"Here's a summary of the previous rounds:\n{render_transcript(context.history)}"
        if has_history
        else ""
    )
    discussion = " and the previous discussion" if has_history else ""

    return f"""
You are in round {context.round_number} of a collaborative brainstorming session about this request:

---
{context.problem}
---

{summary}

Claude's latest perspective:
{context.caller_input}

Based on Claude's perspective{discussion}, please:
1. Identify areas where you agree with Claude
2. Note any valuable insights from Claude that you hadn't considered
3. Respectfully point out any potential issues with Claude's approach
4. Build upon both your ideas to refine the approach
5. Suggest concrete next steps or details to consider

Remember, this is a collaborative process to develop the best possible solution.
"""


def build_synthesis_prompt(problem: str, history: Sequence[BrainstormRound]) -> str:
    return f"""
You've participated in a collaborative brainstorming session with Claude about this request:

---
{problem}
---

Here's the complete conversation history:
{render_transcript(history)}

Based on this collaborative discussion, please provide:
1. A comprehensive synthesis of the best ideas from both assistants
2. A clear, step-by-step plan to address the user's request
3. Required resources, tools, or information needed
4. Any potential challenges and how to address them
5. A conclusion summarizing the unified approach

Present this as a unified final plan that represents the best collaborative thinking of both assistants.
"""
