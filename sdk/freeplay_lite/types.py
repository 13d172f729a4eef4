"""Type definitions for freeplay-lite."""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union


class FreeplayError(Exception):
    """Base class for errors raised by freeplay-lite."""


class ConfigurationError(FreeplayError):
    """Required settings are missing."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        lines = [f"Missing required environment variables: {', '.join(self.missing)}"]
        lines.append("Please set them before running:")
        for name in self.missing:
            hint = name.removeprefix("FREEPLAY_").lower().replace("_", "-")
            lines.append(f"  export {name}='your-{hint}'")
        super().__init__("\n".join(lines))


class TemplateArgumentError(FreeplayError, ValueError):
    """A template lookup was called without a usable identifier."""


@dataclass(frozen=True)
class Message:
    """A single turn in a conversation."""

    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class MediaSlot:
    type: str
    placeholder_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MediaSlot":
        return cls(type=data.get("type", ""), placeholder_name=data.get("placeholder_name", ""))


@dataclass(frozen=True)
class HistoryPlaceholder:
    """Marks where prior conversation turns go in a template."""

    kind: str = "history"


@dataclass(frozen=True)
class ContentMessage:
    """A template message whose content still holds {{variable}} markers."""

    role: str
    content: str
    media_slots: tuple[MediaSlot, ...] = ()


TemplateMessage = Union[HistoryPlaceholder, ContentMessage]


def _parse_template_message(data: Mapping[str, Any]) -> TemplateMessage:
    if data.get("kind") == "history":
        return HistoryPlaceholder()
    slots = tuple(MediaSlot.from_dict(s) for s in data.get("media_slots") or [])
    return ContentMessage(
        role=data.get("role", ""),
        content=data.get("content") or "",
        media_slots=slots,
    )


@dataclass(frozen=True)
class TemplateMetadata:
    model: Optional[str] = None
    provider: Optional[str] = None
    flavor: Optional[str] = None
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TemplateMetadata":
        data = data or {}
        return cls(
            model=data.get("model"),
            provider=data.get("provider"),
            flavor=data.get("flavor"),
            params=dict(data.get("params") or {}),
        )


@dataclass(frozen=True)
class PromptTemplate:
    """
    A versioned prompt template as returned by the service.

    ``content`` keeps the order the service sent. Media slots and the
    tool/output schemas are carried through untouched for the caller.
    """

    template_id: str
    version_id: str
    name: str
    metadata: TemplateMetadata
    content: tuple[TemplateMessage, ...]
    tool_schema: Optional[list] = None
    output_schema: Optional[dict] = None
    version_name: Optional[str] = None
    version_description: Optional[str] = None
    format_version: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PromptTemplate":
        """Build a template from the JSON body of a fetch response."""
        return cls(
            template_id=data.get("prompt_template_id", ""),
            version_id=data.get("prompt_template_version_id", ""),
            name=data.get("prompt_template_name", ""),
            metadata=TemplateMetadata.from_dict(data.get("metadata")),
            content=tuple(_parse_template_message(m) for m in data.get("content") or []),
            tool_schema=data.get("tool_schema"),
            output_schema=data.get("output_schema"),
            version_name=data.get("version_name"),
            version_description=data.get("version_description"),
            format_version=data.get("format_version"),
        )

    @property
    def history_slots(self) -> int:
        return sum(1 for m in self.content if isinstance(m, HistoryPlaceholder))


@dataclass(frozen=True)
class TemplateSummary:
    id: str
    name: str
    latest_version_id: Optional[str] = None


@dataclass(frozen=True)
class TemplatePage:
    """One page of the prompt template listing."""

    templates: tuple[TemplateSummary, ...]
    page: Optional[int] = None
    page_size: Optional[int] = None
    has_next: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplatePage":
        pagination = data.get("pagination") or {}
        templates = tuple(
            TemplateSummary(
                id=t.get("id", ""),
                name=t.get("name", ""),
                latest_version_id=t.get("latest_template_version_id"),
            )
            for t in data.get("data") or []
        )
        return cls(
            templates=templates,
            page=pagination.get("page"),
            page_size=pagination.get("page_size"),
            has_next=bool(pagination.get("has_next", False)),
        )


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int
    completion_tokens: int

    def to_dict(self) -> dict:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
        }


@dataclass(frozen=True)
class CallInfo:
    """Metadata about one model invocation. Times are unix seconds."""

    model: str
    provider: str
    start_time: float
    end_time: float
    usage: Usage

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "model": self.model,
            "provider": self.provider,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "usage": self.usage.to_dict(),
        }


@dataclass
class CompletionRecord:
    """
    Payload for the record-completion endpoint.

    Optional sections left as None are dropped from ``to_dict()`` entirely,
    the service reads a missing key differently from an empty one.
    """

    messages: list[dict]
    inputs: dict
    prompt_info: Optional[dict] = None
    trace_info: Optional[dict] = None
    call_info: Optional[dict] = None
    session_info: Optional[dict] = None

    def to_dict(self) -> dict:
        payload: dict = {"messages": self.messages, "inputs": self.inputs}
        for key in ("prompt_info", "trace_info", "call_info", "session_info"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


@dataclass
class TraceRecord:
    """Payload for the record-trace endpoint."""

    input: Any
    output: Any
    agent_name: Optional[str] = None
    custom_metadata: Optional[dict] = None

    def to_dict(self) -> dict:
        payload: dict = {"input": self.input, "output": self.output}
        if self.agent_name is not None:
            payload["agent_name"] = self.agent_name
        if self.custom_metadata is not None:
            payload["custom_metadata"] = self.custom_metadata
        return payload


@dataclass(frozen=True)
class HTTPResult:
    """
    Outcome of a single request.

    ``status_code`` 0 means the exchange never completed (connect, timeout,
    or an unparseable body) and ``error_message`` says why. Any other value
    is the real HTTP status with ``body`` holding the parsed JSON.
    """

    status_code: int
    body: Any = field(default_factory=dict)
    error_message: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "HTTPResult":
        return cls(status_code=0, body={}, error_message=message)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299

    @property
    def is_transport_failure(self) -> bool:
        return self.status_code == 0


def estimate_tokens(text: str) -> int:
    """
    Rough token count at four characters per token.

    Not a tokenizer. Good enough for filling in ``CallInfo.usage`` when the
    model response does not report usage.
    """
    return math.ceil(len(text) / 4.0)


def estimate_message_tokens(messages: Iterable[Union[Message, Mapping[str, Any]]]) -> int:
    """Sum of ``estimate_tokens`` over every message's content."""
    total = 0
    for message in messages:
        content = message.content if isinstance(message, Message) else message.get("content")
        total += estimate_tokens(content or "")
    return total
