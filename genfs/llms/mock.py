"""
Simulated chat model used when no API key is configured.

MockChatModel scripts a short component build: it creates a component,
creates /App.jsx to render it, polishes the component with a str_replace and
then answers with a summary. It never calls the network, which makes it the
backend for local development and tests.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from langchain_core.callbacks import CallbackManagerForLLMRun
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.outputs import ChatGeneration, ChatResult

from genfs.commands import STR_REPLACE_EDITOR

CARD_CLASS = "p-6 bg-white rounded-lg shadow"
POLISHED_CARD_CLASS = "p-6 bg-white rounded-xl shadow-lg"

COMPONENT_BODIES = {
    "Counter": """import { useState } from 'react';

export default function Counter() {
  const [count, setCount] = useState(0);

  return (
    <div className="%(card)s">
      <h2 className="text-xl font-bold mb-4">Counter</h2>
      <p className="text-3xl mb-4">{count}</p>
      <div className="flex gap-2">
        <button onClick={() => setCount(count - 1)}>Decrease</button>
        <button onClick={() => setCount(0)}>Reset</button>
        <button onClick={() => setCount(count + 1)}>Increase</button>
      </div>
    </div>
  );
}
""",
    "ContactForm": """import { useState } from 'react';

export default function ContactForm() {
  const [form, setForm] = useState({ name: '', email: '', message: '' });

  const update = (field) => (e) => setForm({ ...form, [field]: e.target.value });

  return (
    <form className="%(card)s" onSubmit={(e) => e.preventDefault()}>
      <h2 className="text-xl font-bold mb-4">Contact Us</h2>
      <input value={form.name} onChange={update('name')} placeholder="Name" />
      <input value={form.email} onChange={update('email')} placeholder="Email" />
      <textarea value={form.message} onChange={update('message')} placeholder="Message" />
      <button type="submit">Send</button>
    </form>
  );
}
""",
    "Card": """export default function Card({ title = 'Card Title', children }) {
  return (
    <div className="%(card)s">
      <h2 className="text-xl font-bold mb-2">{title}</h2>
      <div className="text-gray-600">
        {children || 'This is a simple card component.'}
      </div>
    </div>
  );
}
""",
}

APP_TEMPLATE = """import %(name)s from './components/%(name)s';

export default function App() {
  return (
    <div className="min-h-screen flex items-center justify-center bg-gray-100">
      <%(name)s />
    </div>
  );
}
"""


def _text_of(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    return " ".join(
        block.get("text", "") if isinstance(block, dict) else str(block)
        for block in content
    )


def pick_component(prompt: str) -> str:
    """Choose which component to build from the user's request."""
    lowered = prompt.lower()
    if "form" in lowered:
        return "ContactForm"
    if "card" in lowered:
        return "Card"
    return "Counter"


class MockChatModel(BaseChatModel):
    """Deterministic chat model that emits a scripted sequence of tool calls."""

    model: str = "mock-claude-sonnet-4-0"

    @property
    def _llm_type(self) -> str:
        return "genfs-mock"

    @property
    def _identifying_params(self) -> dict[str, Any]:
        return {"model": self.model}

    def bind_tools(self, tools: Sequence[Any], **kwargs: Any) -> "MockChatModel":
        # The script only uses the built-in tools, so binding is a no-op
        return self

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: Optional[list[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> ChatResult:
        prompt = ""
        step = 0
        for message in messages:
            if isinstance(message, HumanMessage):
                prompt = _text_of(message)
                step = 0
            elif isinstance(message, AIMessage):
                step += 1

        message = self._script_step(pick_component(prompt), step)
        return ChatResult(generations=[ChatGeneration(message=message)])

    def _script_step(self, name: str, step: int) -> AIMessage:
        component_path = f"/components/{name}.jsx"

        if step == 0:
            return self._tool_call(
                step,
                f"I'll create a {name} component.",
                {
                    "command": "create",
                    "path": component_path,
                    "file_text": COMPONENT_BODIES[name] % {"card": CARD_CLASS},
                },
            )
        if step == 1:
            return self._tool_call(
                step,
                "Now I'll render it from App.jsx.",
                {
                    "command": "create",
                    "path": "/App.jsx",
                    "file_text": APP_TEMPLATE % {"name": name},
                },
            )
        if step == 2:
            return self._tool_call(
                step,
                "Let me polish the styling.",
                {
                    "command": "str_replace",
                    "path": component_path,
                    "old_str": CARD_CLASS,
                    "new_str": POLISHED_CARD_CLASS,
                },
            )
        return AIMessage(
            content=(
                f"I've created the {name} component in {component_path} and rendered it "
                "from /App.jsx. This is a static response: set an API key to use a real model."
            )
        )

    @staticmethod
    def _tool_call(step: int, text: str, args: dict[str, Any]) -> AIMessage:
        return AIMessage(
            content=text,
            tool_calls=[
                {
                    "name": STR_REPLACE_EDITOR,
                    "args": args,
                    "id": f"call_mock_{step}",
                    "type": "tool_call",
                }
            ],
        )
