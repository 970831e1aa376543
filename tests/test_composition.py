"""Tests for chains, agent composition and the agent registry."""

from unittest.mock import MagicMock

import pytest

from agent_toolkit.core.agent import AgentChainBuilder, AgentRegistry, MultiAgent, ReActAgent, combine
from agent_toolkit.core.chains import Chain, ConversationChain, LLMChain, SequentialChain
from agent_toolkit.core.primitives import (
    ContextMemory,
    ExecutionFailedError,
    MessageRole,
    PromptTemplate,
    image_message,
)
from agent_toolkit.core.agent.parsers import JSONOutputParser
from agent_toolkit.llm import GenerationParameters


class Upper(Chain[str, str]):
    def run(self, input: str) -> str:
        return input.upper()


class Exclaim(Chain[str, str]):
    def run(self, input: str) -> str:
        return input + "!"


def final(answer: str) -> str:
    return f"Thought: done\nAction: Final Answer\nAction Input: {answer}"


def test_combined_agents_pipe_output(scripted_llm, make_tool):
    first_llm = scripted_llm([final("42")])
    second_llm = scripted_llm([final("got:42")])

    first = ReActAgent(first_llm, [make_tool("a")])
    second = ReActAgent(second_llm, [make_tool("b"), make_tool("c")])

    pipeline = combine(first, second)

    assert pipeline.run("x") == "got:42"
    assert "Question: 42\n" in second_llm.prompts[0]
    assert [tool.name for tool in pipeline.tools] == ["a", "b", "c"]
    assert pipeline.description == "MultiAgent: ReAct Agent with 1 tools -> ReAct Agent with 2 tools"


class GotPrefix(Chain[str, str]):
    def run(self, input: str) -> str:
        return "got:" + input


def test_combine_feeds_agent_answer_to_echo(scripted_llm):
    pipeline = combine(ReActAgent(scripted_llm([final("42")]), []), GotPrefix())
    assert pipeline.run("What is the answer?") == "got:42"


def test_agent_then_returns_multi_agent(scripted_llm):
    agent = ReActAgent(scripted_llm([final("hello")]), [])
    pipeline = agent.then(Exclaim())

    assert isinstance(pipeline, MultiAgent)
    assert pipeline.run("ignored") == "hello!"


def test_multi_agent_keeps_composing_into_multi_agent(scripted_llm, make_tool):
    first = ReActAgent(scripted_llm([final("hello")]), [make_tool("a")])
    second = ReActAgent(scripted_llm([final("hello there")]), [make_tool("b")])

    pipeline = first.then(second).then(Exclaim()).combine(Exclaim())

    assert isinstance(pipeline, MultiAgent)
    assert [tool.name for tool in pipeline.tools] == ["a", "b"]
    assert pipeline.description.startswith("MultiAgent: MultiAgent: MultiAgent: ReAct Agent with 1 tools")
    assert pipeline.run("x") == "hello there!!"


def test_failure_in_first_stage_skips_second():
    failing = MagicMock(spec=Chain)
    failing.run.side_effect = ExecutionFailedError("boom")
    second = MagicMock(spec=Chain)

    with pytest.raises(ExecutionFailedError):
        MultiAgent(failing, second).run("x")
    second.run.assert_not_called()


def test_sequential_chain():
    chain = Upper().then(Exclaim())
    assert isinstance(chain, SequentialChain)
    assert chain.run("hi") == "HI!"
    assert Upper().combine(Exclaim()).then(Exclaim()).run("a") == "A!!"


def test_chain_builder_folds_in_order():
    pipeline = AgentChainBuilder().add(Upper()).add(Exclaim()).add(Exclaim()).build()
    assert pipeline.run("go") == "GO!!"


def test_chain_builder_single_and_empty():
    only = Upper()
    builder = AgentChainBuilder().add(only)
    assert builder.build() is only
    assert builder.agents() == [only]

    with pytest.raises(ExecutionFailedError, match="Agent chain is empty"):
        AgentChainBuilder().build()


def test_agent_registry():
    registry = AgentRegistry()
    first, second = Upper(), Exclaim()
    registry.register(first, "worker")
    registry.register(second, "worker")

    assert len(registry) == 1
    assert registry.get("worker") is second
    assert registry.get("missing") is None
    assert registry.names() == ["worker"]
    assert registry.all() == [second]

    registry.clear()
    assert len(registry) == 0


class TestLLMChain:
    def test_formats_prompt_and_returns_text(self, scripted_llm):
        llm = scripted_llm(["Bonjour"])
        chain = LLMChain(PromptTemplate("Translate to {language}: {text}"), llm)

        assert chain.run({"language": "French", "text": "Hello"}) == "Bonjour"
        assert llm.prompts == ["Translate to French: Hello"]

    def test_output_parser(self, scripted_llm):
        chain = LLMChain(PromptTemplate("List {n}"), scripted_llm(['["a", "b"]']), output_parser=JSONOutputParser())
        assert chain.run({"n": 2}) == ["a", "b"]

    def test_parameters_forwarded(self, scripted_llm):
        llm = scripted_llm(["ok"])
        chain = LLMChain(PromptTemplate("x"), llm, parameters=GenerationParameters(temperature=0.0, top_p=0.9))
        chain.run({})
        assert llm.kwargs[0]["temperature"] == 0.0
        assert llm.kwargs[0]["top_p"] == 0.9


class TestConversationChain:
    def test_sends_whole_memory(self, scripted_llm):
        llm = scripted_llm(["Hi Ada", "You are Ada"])
        memory = ContextMemory()
        chain = ConversationChain(llm, memory)

        chain.run("I am Ada")
        assert chain.run("Who am I?") == "You are Ada"

        assert [m.text_content for m in llm.requests[1]] == ["I am Ada", "Hi Ada", "Who am I?"]
        assert len(memory) == 4

    def test_send_image_message(self, scripted_llm):
        llm = scripted_llm(["A cat"])
        chain = ConversationChain(llm, ContextMemory())

        assert chain.send(image_message(MessageRole.USER, "https://example.com/cat.png")) == "A cat"
        assert llm.requests[0][0].has_images

    def test_empty_reply_fails(self, scripted_llm):
        memory = ContextMemory()
        chain = ConversationChain(scripted_llm([""]), memory)

        with pytest.raises(ExecutionFailedError):
            chain.run("hello")
        assert len(memory) == 1
