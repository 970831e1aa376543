"""
Basic usage example for the agent toolkit.
"""

import logging

from agent_toolkit import AgentBuilder, AgentType, ContextMemory
from agent_toolkit.llm import create_chat_completion_client
from agent_toolkit.tools import CalculatorTool, SearchTool, WeatherTool


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    llm = create_chat_completion_client("openai", model="gpt-4o-mini")
    tools = [CalculatorTool(), SearchTool(), WeatherTool()]

    react = AgentBuilder().with_llm(llm).with_tools(tools).with_max_iterations(5).with_verbose(True).build()
    result = react.run_with_result("What is (24 + 18) * 0.75? Explain each step.")
    print("Final answer:", result.output if result.success else result.error)
    for step in result.steps:
        print(f"- {step.action}({step.action_input}) -> {step.observation}")

    planner = AgentBuilder().with_llm(llm).with_tools(tools).with_agent_type(AgentType.PLAN_AND_EXECUTE).build()
    print("Plan-and-Execute:", planner.run("Find the weather in Paris and calculate 21 * 2"))

    chat = AgentBuilder.conversational_agent(llm, tools, memory=ContextMemory(max_messages=20, max_tokens=2000))
    print(chat.run("Hi, I'm planning a trip to Paris."))
    print(chat.run("What's the weather like there?"))


if __name__ == "__main__":
    main()
