"""
Tests for the BrainstormOrchestrator.
"""

from unittest.mock import AsyncMock

import pytest

from gemini_collab.errors import ConnectionNotReadyError, UpstreamError
from gemini_collab.models.manager import ModelVariant
from gemini_collab.models.session import BrainstormRound, ErrorKind
from gemini_collab.services.brainstorm import (
    EMPTY_HISTORY_MESSAGE,
    MISSING_INPUT_MESSAGE,
    BrainstormOrchestrator,
)
from tests.fixtures import create_mock_connection


@pytest.fixture
def orchestrator(mock_connection):
    return BrainstormOrchestrator(mock_connection)


def _sent_prompt(connection) -> str:
    variant, prompt = connection.generate.await_args.args
    assert variant is ModelVariant.PRO
    return prompt


class TestRunRound:
    @pytest.mark.asyncio
    async def test_first_round_prompt(self, orchestrator, mock_connection):
        result = await orchestrator.run_round("Build a todo app", 1)

        assert result.ok
        assert result.text == "Test response"
        prompt = _sent_prompt(mock_connection)
        assert "Build a todo app" in prompt
        assert "first round" in prompt

    @pytest.mark.asyncio
    async def test_first_round_ignores_input_and_history(self, orchestrator, mock_connection):
        history = [BrainstormRound(1, "ignored input", "ignored reply")]

        await orchestrator.run_round("Build a todo app", 1, "also ignored", history)

        prompt = _sent_prompt(mock_connection)
        assert "ignored" not in prompt

    @pytest.mark.asyncio
    async def test_later_round_requires_input(self, orchestrator, mock_connection):
        result = await orchestrator.run_round("Build a todo app", 2, None, [])

        assert result.error.kind is ErrorKind.INVALID_INPUT
        assert result.error.message == MISSING_INPUT_MESSAGE
        mock_connection.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_later_round_includes_history(self, orchestrator, mock_connection):
        history = [BrainstormRound(1, "X", "A")]

        result = await orchestrator.run_round("Build a todo app", 2, "Y", history)

        assert result.ok
        prompt = _sent_prompt(mock_connection)
        assert "round 2" in prompt
        assert "Round 1:" in prompt
        assert "- Claude: X..." in prompt
        assert "- Gemini: A..." in prompt
        assert "Claude's latest perspective:\nY" in prompt

    @pytest.mark.asyncio
    async def test_long_history_fields_are_truncated(self, orchestrator, mock_connection):
        history = [BrainstormRound(1, "c" * 2000, "g" * 2000)]

        await orchestrator.run_round("problem", 2, "next", history)

        prompt = _sent_prompt(mock_connection)
        assert "c" * 500 + "..." in prompt
        assert "c" * 501 not in prompt
        assert "g" * 501 not in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("round_number", [0, -1, "2", True, 1.5])
    async def test_invalid_round(self, orchestrator, mock_connection, round_number):
        result = await orchestrator.run_round("problem", round_number, "input")

        assert result.error.kind is ErrorKind.INVALID_INPUT
        mock_connection.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_problem(self, orchestrator, mock_connection):
        result = await orchestrator.run_round("", 1)

        assert result.error.kind is ErrorKind.INVALID_INPUT
        mock_connection.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_same_inputs_same_prompt(self, orchestrator, mock_connection):
        history = [BrainstormRound(1, "X", "A")]

        first = await orchestrator.run_round("problem", 2, "Y", history)
        first_prompt = _sent_prompt(mock_connection)
        second = await orchestrator.run_round("problem", 2, "Y", history)
        second_prompt = _sent_prompt(mock_connection)

        assert first == second
        assert first_prompt == second_prompt
        assert mock_connection.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_upstream_failure(self, orchestrator, mock_connection):
        mock_connection.generate = AsyncMock(side_effect=UpstreamError("quota exceeded"))

        result = await orchestrator.run_round("problem", 1)

        assert result.error.kind is ErrorKind.UPSTREAM
        assert "quota exceeded" in result.error.message

    @pytest.mark.asyncio
    async def test_not_ready_is_upstream(self, orchestrator, mock_connection):
        mock_connection.generate = AsyncMock(side_effect=ConnectionNotReadyError("not ready"))

        result = await orchestrator.run_round("problem", 1)

        assert result.error.kind is ErrorKind.UPSTREAM
        assert isinstance(result.error.cause, ConnectionNotReadyError)


class TestRunSynthesis:
    @pytest.mark.asyncio
    async def test_empty_history(self, orchestrator, mock_connection):
        result = await orchestrator.run_synthesis("problem", [])

        assert result.error.kind is ErrorKind.INVALID_INPUT
        assert result.error.message == EMPTY_HISTORY_MESSAGE
        mock_connection.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_synthesis_prompt(self, orchestrator, mock_connection):
        history = [BrainstormRound(1, "X", "A"), BrainstormRound(2, "Y", "B")]

        result = await orchestrator.run_synthesis("Build a todo app", history)

        assert result.ok
        prompt = _sent_prompt(mock_connection)
        assert "Build a todo app" in prompt
        assert prompt.index("Round 1:") < prompt.index("Round 2:")
        assert "- Gemini: B..." in prompt


class TestFullSession:
    @pytest.mark.asyncio
    async def test_host_owned_history_across_rounds(self):
        connection = create_mock_connection()
        connection.generate = AsyncMock(side_effect=["A", "B", "plan"])
        orchestrator = BrainstormOrchestrator(connection)
        problem = "Build a todo app"

        first = await orchestrator.run_round(problem, 1, "X")
        history = [BrainstormRound(1, "X", first.text)]

        second = await orchestrator.run_round(problem, 2, "Y", history)
        second_prompt = connection.generate.await_args.args[1]
        history.append(BrainstormRound(2, "Y", second.text))

        final = await orchestrator.run_synthesis(problem, history)

        assert (first.text, second.text, final.text) == ("A", "B", "plan")
        assert "Round 1" in second_prompt
        assert "X" in second_prompt
        assert "A" in second_prompt
        assert "Y" in second_prompt
        assert connection.generate.await_count == 3
