"""Tests for the ReAct loop."""

import logging

import pytest

from agent_toolkit.core.agent import ReActAgent
from agent_toolkit.core.primitives import (
    InvalidResponseFormatError,
    MaxIterationsExceededError,
    Tool,
    ToolExecutionError,
    ToolNotFoundError,
)
from agent_toolkit.llm import GenerationParameters


def react(thought: str, action: str, action_input: str) -> str:
    return f"Thought: {thought}\nAction: {action}\nAction Input: {action_input}"


def test_final_answer_on_first_iteration(scripted_llm):
    llm = scripted_llm([react("I know it", "Final Answer", "42")])
    agent = ReActAgent(llm, [])

    result = agent.run_with_result("What is six times seven?")

    assert result.success
    assert result.output == "42"
    assert result.iterations == 1
    assert len(result.steps) == 1
    assert result.steps[0].final_answer == "42"
    assert result.steps[0].observation is None


def test_tool_then_final_answer(scripted_llm, make_tool):
    llm = scripted_llm(
        [
            react("look it up", "search", "python"),
            react("done", "Final Answer", "Python is a language"),
        ]
    )
    agent = ReActAgent(llm, [make_tool("search")])

    result = agent.run_with_result("What is Python?")

    assert result.output == "Python is a language"
    assert result.iterations == 2
    first, second = result.steps
    assert (first.action, first.action_input, first.observation) == ("search", "python", "search:python")
    assert second.final_answer == "Python is a language"


def test_follow_up_prompt_carries_observation_and_history(scripted_llm, make_tool):
    llm = scripted_llm(
        [
            react("look it up", "search", "python"),
            react("done", "Final Answer", "ok"),
        ]
    )
    agent = ReActAgent(llm, [make_tool("search")])
    agent.run("What is Python?")

    first_prompt, second_prompt = llm.prompts
    assert "- search: search tool" in first_prompt
    assert "Question: What is Python?" in first_prompt
    assert "Previous observation: search:python\nQuestion: What is Python?" in second_prompt
    assert "Observation: search:python" in second_prompt


def test_placeholder_text_in_question_and_observation_is_kept(scripted_llm):
    llm = scripted_llm(
        [
            react("check", "template", "x"),
            react("done", "Final Answer", "ok"),
        ]
    )
    tool = Tool(name="template", description="template tool", func=lambda _: "template uses {input} here")
    ReActAgent(llm, [tool]).run("What does {input} mean?")

    first_prompt, second_prompt = llm.prompts
    assert "Question: What does {input} mean?" in first_prompt
    assert "Observation: template uses {input} here" in second_prompt
    assert "Previous observation: template uses {input} here\nQuestion: What does {input} mean?" in second_prompt


def test_final_answer_on_iteration_k_records_k_steps(scripted_llm, make_tool):
    responses = [react(f"step {i}", "echo", str(i)) for i in range(3)]
    responses.append(react("finished", "Final Answer", "done"))
    agent = ReActAgent(scripted_llm(responses), [make_tool("echo")], max_iterations=5)

    result = agent.run_with_result("count")

    assert result.success
    assert result.iterations == 4
    assert [step.observation for step in result.steps[:3]] == ["echo:0", "echo:1", "echo:2"]


def test_max_iterations_exhausted(scripted_llm, make_tool):
    responses = [react("again", "echo", "x")] * 3
    agent = ReActAgent(scripted_llm(responses), [make_tool("echo")], max_iterations=3)

    with pytest.raises(MaxIterationsExceededError) as excinfo:
        agent.run("loop forever")
    assert excinfo.value.limit == 3
    assert str(excinfo.value) == "Agent exceeded maximum iterations (3)"


def test_max_iterations_result_keeps_every_step(scripted_llm, make_tool):
    responses = [react("again", "echo", "x")] * 4
    agent = ReActAgent(scripted_llm(responses), [make_tool("echo")], max_iterations=4)

    result = agent.run_with_result("loop forever")

    assert not result.success
    assert isinstance(result.error, MaxIterationsExceededError)
    assert result.iterations == 4
    assert all(step.observation == "echo:x" for step in result.steps)
    assert result.output == ""


def test_unknown_tool_records_step_without_observation(scripted_llm, make_tool):
    llm = scripted_llm([react("try it", "missing", "abc")])
    agent = ReActAgent(llm, [make_tool("search")])

    result = agent.run_with_result("anything")

    assert not result.success
    assert isinstance(result.error, ToolNotFoundError)
    assert str(result.error) == "Tool 'missing' not found"
    assert len(result.steps) == 1
    assert result.steps[0].action == "missing"
    assert result.steps[0].observation is None


def test_tool_failure_propagates(scripted_llm):
    def broken(_text):
        raise ToolExecutionError("backend down")

    llm = scripted_llm([react("use it", "broken", "x")])
    agent = ReActAgent(llm, [Tool(name="broken", description="always fails", func=broken)])

    with pytest.raises(ToolExecutionError, match="backend down"):
        agent.run("anything")


def test_unparseable_response_fails_run(scripted_llm):
    agent = ReActAgent(scripted_llm(["I refuse to follow the format."]), [])

    with pytest.raises(InvalidResponseFormatError):
        agent.run("anything")


def test_rejects_non_positive_iteration_limit(scripted_llm):
    with pytest.raises(ValueError):
        ReActAgent(scripted_llm([]), [], max_iterations=0)


def test_description_counts_tools(scripted_llm, make_tool):
    agent = ReActAgent(scripted_llm([]), [make_tool("a"), make_tool("b")])
    assert agent.description == "ReAct Agent with 2 tools"


def test_parameters_are_forwarded(scripted_llm):
    llm = scripted_llm([react("done", "Final Answer", "ok")])
    agent = ReActAgent(llm, [], parameters=GenerationParameters(temperature=0.1, max_tokens=64))
    agent.run("hi")

    assert llm.kwargs[0]["temperature"] == 0.1
    assert llm.kwargs[0]["max_output_tokens"] == 64


def test_verbose_traces_at_info(scripted_llm, caplog):
    agent = ReActAgent(scripted_llm([react("done", "Final Answer", "ok")]), [], verbose=True)
    with caplog.at_level(logging.INFO, logger="agent_toolkit.core.agent.react"):
        agent.run("hi")

    assert "[REACT START]" in caplog.text
    assert "FINAL ANSWER" in caplog.text


def test_quiet_agent_does_not_log_at_info(scripted_llm, caplog):
    agent = ReActAgent(scripted_llm([react("done", "Final Answer", "ok")]), [])
    with caplog.at_level(logging.INFO, logger="agent_toolkit.core.agent.react"):
        agent.run("hi")

    assert "[REACT START]" not in caplog.text
