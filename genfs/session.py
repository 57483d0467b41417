"""
TurnSession - one agent turn against a freshly rehydrated file system.

A turn deserializes the caller's snapshot (or starts empty), lets the chat
model issue tool commands one at a time up to a step ceiling, and finally
re-serializes the tree. Applying commands and producing the snapshot are
separate phases: a turn that is aborted midway yields no snapshot, so the
caller persists nothing from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    SystemMessage,
    ToolMessage,
    convert_to_messages,
)

from genfs.config import GenFSConfig
from genfs.executor import CommandExecutor, Observer
from genfs.labels import get_tool_label
from genfs.llms.providers import get_chat_model, get_provider_type, supports_prompt_caching
from genfs.prompts import get_generation_prompt
from genfs.serializer import deserialize, serialize
from genfs.tools.langchain_tools import LangChainToolProvider
from genfs.types import ERROR_PREFIX
from genfs.vfs import VirtualFileSystem

logger = logging.getLogger(__name__)

StopReason = Literal["completed", "max_steps"]
Snapshot = dict[str, dict[str, Any]]


@dataclass
class ToolCallRecord:
    """One executed tool call, for display and observability."""

    step: int
    tool_name: str
    arguments: dict[str, Any]
    label: str
    output: str

    @property
    def success(self) -> bool:
        return not self.output.startswith(ERROR_PREFIX)


@dataclass
class TurnResult:
    """Outcome of a completed turn. `messages` holds only what the turn added."""

    messages: list[BaseMessage]
    steps: int
    stopped_reason: StopReason
    snapshot: Snapshot
    tool_calls: list[ToolCallRecord] = field(default_factory=list)

    @property
    def final_message(self) -> AIMessage | None:
        for message in reversed(self.messages):
            if isinstance(message, AIMessage):
                return message
        return None


class TurnSession:
    """Runs a single agent turn with the str_replace_editor and file_manager tools."""

    def __init__(
        self,
        config: GenFSConfig | None = None,
        snapshot: Mapping[str, Any] | None = None,
        model: BaseChatModel | None = None,
        extra_instructions: str | None = None,
    ):
        """
        Initialize the turn.

        Args:
            config: GenFS configuration. Read from the environment if omitted.
            snapshot: Serialized tree from the previous turn; None starts empty.
            model: Chat model to drive the turn. Built from config if omitted.
            extra_instructions: Text appended to the system prompt.

        Raises:
            Corrupt: If the snapshot cannot be deserialized.
        """
        self.config = config or GenFSConfig.from_env()
        if self.config.debug:
            logging.getLogger("genfs").setLevel(logging.DEBUG)

        self.vfs = VirtualFileSystem(undo_depth=self.config.editor.undo_depth)
        if snapshot:
            deserialize(snapshot, self.vfs)

        self.executor = CommandExecutor(self.vfs)
        self.tool_provider = LangChainToolProvider(self.executor)
        self.provider_type = get_provider_type(self.config)
        self.model = model or get_chat_model(self.config)
        self.extra_instructions = extra_instructions

        if self.provider_type == "mock":
            self.max_steps = self.config.agent.mock_max_steps
        else:
            self.max_steps = self.config.agent.max_steps

        logger.debug(
            "Turn ready: provider=%s, %d nodes, max_steps=%d",
            self.provider_type,
            len(self.vfs),
            self.max_steps,
        )

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer for successful file system changes."""
        return self.executor.subscribe(observer)

    def _system_message(self) -> SystemMessage:
        prompt = get_generation_prompt(self.extra_instructions)
        if supports_prompt_caching(self.config):
            return SystemMessage(
                content=[
                    {"type": "text", "text": prompt, "cache_control": {"type": "ephemeral"}}
                ]
            )
        return SystemMessage(content=prompt)

    def run(self, messages: Sequence[BaseMessage | dict[str, Any]]) -> TurnResult:
        """
        Run the agent loop until the model stops calling tools or the step ceiling.

        Args:
            messages: Conversation so far, as LangChain messages or
                {"role", "content"} dicts. The system prompt is added here.

        Returns:
            TurnResult including the snapshot to persist.
        """
        conversation: list[BaseMessage] = [self._system_message()]
        conversation.extend(convert_to_messages(list(messages)))
        history_start = len(conversation)

        bound_model = self.model.bind_tools(self.tool_provider.get_tools())
        records: list[ToolCallRecord] = []
        stopped_reason: StopReason = "max_steps"
        steps = 0

        while steps < self.max_steps:
            ai_message = bound_model.invoke(conversation)
            conversation.append(ai_message)
            steps += 1

            if not ai_message.tool_calls:
                stopped_reason = "completed"
                break

            for tool_call in ai_message.tool_calls:
                tool_name = tool_call["name"]
                arguments = tool_call["args"]
                label = get_tool_label(tool_name, arguments).label

                output = self.tool_provider.execute_tool(tool_name, arguments)
                records.append(
                    ToolCallRecord(
                        step=steps,
                        tool_name=tool_name,
                        arguments=arguments,
                        label=label,
                        output=output,
                    )
                )
                logger.debug("Step %d: %s -> %s", steps, label, output[:100])

                conversation.append(
                    ToolMessage(content=output, tool_call_id=tool_call["id"])
                )

        if stopped_reason == "max_steps":
            logger.info("Turn stopped at the step ceiling (%d steps)", self.max_steps)

        return TurnResult(
            messages=conversation[history_start:],
            steps=steps,
            stopped_reason=stopped_reason,
            snapshot=self.snapshot(),
            tool_calls=records,
        )

    def snapshot(self) -> Snapshot:
        """Serialize the current tree for the persistence layer."""
        return serialize(self.vfs)


def run_turn(
    messages: Sequence[BaseMessage | dict[str, Any]],
    snapshot: Mapping[str, Any] | None = None,
    config: GenFSConfig | None = None,
    model: BaseChatModel | None = None,
    persist: Callable[[Snapshot], None] | None = None,
) -> TurnResult:
    """
    Convenience function to run one turn and hand its snapshot to `persist`.

    `persist` is only called after the turn has completed; if the turn raises,
    nothing is persisted and the exception propagates.
    """
    session = TurnSession(config=config, snapshot=snapshot, model=model)
    result = session.run(messages)
    if persist is not None:
        persist(result.snapshot)
    return result
