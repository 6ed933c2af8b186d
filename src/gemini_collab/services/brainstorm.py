"""Multi-round brainstorming between the host assistant and Gemini.

The orchestrator keeps no session state. The host passes the full history of
earlier rounds on every call and appends the returned text itself before the
next round.
"""

import logging
from typing import Optional, Sequence

from ..errors import GenerationError
from ..models.manager import ConnectionManager, ModelVariant
from ..models.session import BrainstormRound, PromptContext, SessionResult
from . import prompts

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Claude's input is required for rounds after the first one"
EMPTY_HISTORY_MESSAGE = "At least one brainstorming round is required for a synthesis"


class BrainstormOrchestrator:
    """Turns (problem, round, input, history) into exactly one model call."""

    def __init__(self, connection: ConnectionManager):
        self.connection = connection

    async def run_round(
        self,
        problem: str,
        round_number: int,
        caller_input: Optional[str] = None,
        history: Sequence[BrainstormRound] = (),
    ) -> SessionResult:
        """Run one brainstorming round.

        Round 1 asks for an initial perspective and ignores ``caller_input`` and
        ``history``. Later rounds require ``caller_input`` and include a
        truncated transcript of ``history``.
        """
        if not problem:
            return SessionResult.invalid_input("A problem statement is required")
        if isinstance(round_number, bool) or not isinstance(round_number, int):
            return SessionResult.invalid_input("Round must be an integer")
        if round_number < 1:
            return SessionResult.invalid_input("Round must be 1 or greater")

        logger.info(f"Brainstorming round {round_number} with Gemini")

        if round_number == 1:
            prompt = prompts.build_initial_prompt(problem)
        else:
            if not caller_input:
                return SessionResult.invalid_input(MISSING_INPUT_MESSAGE)
            context = PromptContext(
                problem=problem,
                round_number=round_number,
                caller_input=caller_input,
                history=tuple(history),
            )
            prompt = prompts.build_collaboration_prompt(context)

        return await self._generate(prompt)

    async def run_synthesis(
        self, problem: str, history: Sequence[BrainstormRound]
    ) -> SessionResult:
        """Ask for a final unified plan over every round so far."""
        if not problem:
            return SessionResult.invalid_input("A problem statement is required")
        if not history:
            return SessionResult.invalid_input(EMPTY_HISTORY_MESSAGE)

        logger.info(f"Creating brainstorm synthesis over {len(history)} rounds")
        return await self._generate(prompts.build_synthesis_prompt(problem, history))

    async def _generate(self, prompt: str) -> SessionResult:
        try:
            text = await self.connection.generate(ModelVariant.PRO, prompt)
        except GenerationError as e:
            logger.error(f"Error in brainstorming: {e}")
            return SessionResult.upstream(str(e), cause=e)
        return SessionResult.success(text)
