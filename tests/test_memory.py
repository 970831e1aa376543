"""Tests for ContextMemory trimming and rendering."""

import random

import pytest

from agent_toolkit.core.primitives import (
    ChatMessage,
    ContextMemory,
    MessageRole,
    assistant_message,
    image_message,
    mixed_message,
    system_message,
    user_message,
)
from agent_toolkit.utils import GPT3, GPT4


def words(count: int) -> str:
    return " ".join(["word"] * count)


class TestMessageLimit:
    def test_drops_oldest_first(self):
        memory = ContextMemory(max_messages=2)
        memory.add_message(user_message("one"))
        memory.add_message(assistant_message("two"))
        memory.add_message(user_message("three"))

        assert [m.content for m in memory.get_messages()] == ["two", "three"]

    def test_unbounded_by_default(self):
        memory = ContextMemory()
        for index in range(50):
            memory.add_message(user_message(str(index)))
        assert len(memory.get_messages()) == 50


class TestTokenLimit:
    def test_keeps_newest_suffix_within_budget(self):
        memory = ContextMemory(max_tokens=5)
        memory.add_message(user_message(words(3)))
        memory.add_message(assistant_message(words(2)))
        memory.add_message(user_message(words(2)))

        contents = [m.content for m in memory.get_messages()]
        assert contents == [words(2), words(2)]
        assert memory.total_tokens() == 4

    def test_stops_at_first_message_that_does_not_fit(self):
        memory = ContextMemory(max_tokens=6)
        memory.add_message(user_message(words(1)))
        memory.add_message(user_message(words(5)))
        memory.add_message(user_message(words(1)))

        # newest 1 + 5 reaches the budget, so the oldest message is dropped
        assert [m.content for m in memory.get_messages()] == [words(5), words(1)]

    def test_image_costs_fixed_surcharge(self):
        memory = ContextMemory()
        message = mixed_message(MessageRole.USER, "look at this", "https://example.com/a.png")
        assert memory.estimate_tokens(message) == 3 + 85
        assert memory.estimate_tokens(image_message(MessageRole.USER, "https://example.com/b.png")) == 85

    def test_image_message_pushes_out_older_text(self):
        memory = ContextMemory(max_tokens=90)
        memory.add_message(user_message(words(10)))
        memory.add_message(image_message(MessageRole.USER, "https://example.com/a.png"))

        assert len(memory.get_messages()) == 1
        assert memory.get_messages()[0].image_urls == ["https://example.com/a.png"]

    def test_model_profile_is_kept(self):
        assert ContextMemory().model == GPT4
        assert ContextMemory(model=GPT3).model.characters_per_token == 4


@pytest.mark.parametrize("max_messages,max_tokens", [(3, 10), (5, 4), (1, 100), (10, 25)])
def test_limits_hold_after_every_add(max_messages, max_tokens):
    rng = random.Random(max_messages * 100 + max_tokens)
    memory = ContextMemory(max_messages=max_messages, max_tokens=max_tokens)
    for index in range(40):
        message = user_message(words(rng.randint(0, 8))) if index % 2 else assistant_message(words(rng.randint(1, 4)))
        memory.add_message(message)
        retained = memory.get_messages()
        assert len(retained) <= max_messages
        assert memory.total_tokens() <= max_tokens


def test_newest_message_survives_when_it_fits():
    memory = ContextMemory(max_messages=3, max_tokens=6)
    for index in range(10):
        latest = user_message(f"turn {index}")
        memory.add_message(latest)
        assert memory.get_messages()[-1] is latest


def test_as_prompt_context_preserves_order_and_skips_image_only():
    memory = ContextMemory()
    memory.add_message(system_message("be brief"))
    memory.add_message(user_message("hello"))
    memory.add_message(image_message(MessageRole.USER, "https://example.com/cat.png"))
    memory.add_message(assistant_message("hi there"))

    assert memory.as_prompt_context() == "system: be brief\nuser: hello\nassistant: hi there"


def test_as_prompt_context_uses_text_of_mixed_messages():
    memory = ContextMemory()
    memory.add_message(mixed_message(MessageRole.USER, "what is this?", "https://example.com/x.png"))
    assert memory.as_prompt_context() == "user: what is this?"


def test_last_user_message_and_clear():
    memory = ContextMemory()
    assert memory.last_user_message() is None
    memory.add_message(user_message("first"))
    memory.add_message(user_message("second"))
    memory.add_message(assistant_message("reply"))

    assert memory.last_user_message().content == "second"

    memory.clear()
    assert memory.get_messages() == ()
    assert memory.last_user_message() is None


def test_copy_is_independent():
    memory = ContextMemory(max_messages=4)
    memory.add_message(user_message("shared"))
    clone = memory.copy()
    clone.add_message(user_message("only in clone"))

    assert len(memory) == 1
    assert len(clone) == 2
    assert clone.max_messages == 4


def test_messages_are_immutable():
    message = ChatMessage(role=MessageRole.USER, content="fixed")
    with pytest.raises(AttributeError):
        message.content = "changed"
