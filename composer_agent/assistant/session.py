"""Natural-language front-end: an OpenAI tool-calling loop over the dispatcher."""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from openai import OpenAI

from ..config import Settings
from ..errors import ConfigurationError, UnknownTool, ValidationError
from ..tools import ToolDispatcher, ToolOutcome

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """You are a margin trading assistant for the 1delta composer contract on {chain}.
Use the provided tools to read collateral and debt balances, the health factor,
supported tokens and chain information{writes}.
Token arguments are symbols such as USDC or WETH. Amounts are decimal strings in
human units, never base units. Report balances exactly as the tools return them.
If a tool returns an error, explain it to the user instead of guessing a value.
"""

WRITE_CLAUSE = ", and to open, close or adjust positions when the user explicitly asks"


def create_openai_client(settings: Settings) -> OpenAI:
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY not found in environment variables. Please set it in .env file")
    return OpenAI(api_key=settings.openai_api_key)


class AssistantSession:
    """Answer one prompt at a time, dispatching every tool call it requests."""

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        client: Any,
        *,
        model: str,
        chain_name: str,
        max_steps: int = 5,
        allow_writes: bool = False,
        on_tool: Optional[Callable[[ToolOutcome], None]] = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._client = client
        self._model = model
        self._max_steps = max_steps
        self._allow_writes = allow_writes
        self._on_tool = on_tool
        self._tools = dispatcher.definitions(include_writes=allow_writes)
        self._tool_names = {tool["function"]["name"] for tool in self._tools}
        self._system = SYSTEM_INSTRUCTION.format(chain=chain_name, writes=WRITE_CLAUSE if allow_writes else "")

    @property
    def tool_names(self) -> List[str]:
        return sorted(self._tool_names)

    def ask(self, prompt: str) -> str:
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": self._system},
            {"role": "user", "content": prompt},
        ]

        for _ in range(self._max_steps):
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                tools=self._tools,
            )
            message = completion.choices[0].message
            tool_calls = message.tool_calls or []
            if not tool_calls:
                return message.content or ""

            messages.append(
                {
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {"name": call.function.name, "arguments": call.function.arguments},
                        }
                        for call in tool_calls
                    ],
                }
            )
            for call in tool_calls:
                outcome = self.run_tool(call.function.name, call.function.arguments)
                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "content": json.dumps(outcome.to_payload()),
                    }
                )

        logger.info("Tool step budget of %s exhausted, requesting final answer", self._max_steps)
        completion = self._client.chat.completions.create(model=self._model, messages=messages)
        return completion.choices[0].message.content or ""

    def run_tool(self, name: str, arguments: Optional[str]) -> ToolOutcome:
        if name not in self._tool_names:
            outcome = ToolOutcome(tool=name, error=UnknownTool(name))
        else:
            try:
                raw = json.loads(arguments) if arguments else {}
            except json.JSONDecodeError as exc:
                outcome = ToolOutcome(tool=name, error=ValidationError(f"Tool arguments are not valid JSON: {exc.msg}"))
            else:
                outcome = self._dispatcher.invoke(name, raw)

        if self._on_tool is not None:
            self._on_tool(outcome)
        return outcome
