"""
Prompt templates for the agent loops.
"""

from __future__ import annotations

from textwrap import dedent

from ..primitives.prompts import PromptTemplate

NO_TOOLS = "No tools available."

REACT_PROMPT = PromptTemplate(
    dedent(
        """
        You are a helpful AI assistant that can use tools to answer questions.

        Available tools:
        {tools}

        To use a tool, respond with:
        Thought: I need to think about what to do
        Action: tool_name
        Action Input: input_for_tool

        When you have the final answer, respond with:
        Thought: I have the final answer
        Action: Final Answer
        Action Input: your_final_answer

        Previous steps:
        {history}

        Question: {input}

        Let's approach this step by step:
        """
    ).strip(),
    input_variables=("tools", "history", "input"),
)

REACT_STEP_TEMPLATE = PromptTemplate(
    "Thought: {thought}\nAction: {action}\nAction Input: {action_input}\nObservation: {observation}",
    input_variables=("thought", "action", "action_input", "observation"),
)

REACT_FOLLOW_UP = PromptTemplate(
    "Previous observation: {observation}\nQuestion: {question}",
    input_variables=("observation", "question"),
)

PLANNER_PROMPT = PromptTemplate(
    dedent(
        """
        Create a step-by-step plan to answer the following question using the available tools.

        Available tools:
        {tools}

        Question: {input}

        Respond with a numbered list of steps. Each step should be clear and actionable.
        Format your response as:
        1. First step
        2. Second step
        3. Third step
        etc.
        """
    ).strip(),
    input_variables=("tools", "input"),
)

SYNTHESIS_PROMPT = PromptTemplate(
    dedent(
        """
        Based on the original question and the results from executing the plan, provide a comprehensive final answer.

        Original question: {input}

        Plan executed:
        {plan}

        Results:
        {results}

        Provide a clear, comprehensive answer that addresses the original question using the information gathered:
        """
    ).strip(),
    input_variables=("input", "plan", "results"),
)

CONVERSATIONAL_PROMPT = PromptTemplate(
    dedent(
        """
        You are a helpful conversational AI assistant. You can have natural conversations and use tools when needed.

        Available tools:
        {tools}

        If you need to use a tool, respond with:
        USE_TOOL: tool_name
        INPUT: input_for_tool

        Otherwise, respond naturally to the user's message.
        {history}

        User: {input}
        Assistant:
        """
    ).strip(),
    input_variables=("tools", "history", "input"),
)

CONVERSATIONAL_FOLLOW_UP = PromptTemplate(
    dedent(
        """
        The user asked: {input}

        You used the {tool} tool with input: {tool_input}
        The result was: {result}

        Provide a natural, conversational response that incorporates this information:
        """
    ).strip(),
    input_variables=("input", "tool", "tool_input", "result"),
)


def build_history_section(context: str) -> str:
    if not context:
        return ""
    return f"\nConversation history:\n{context}"
