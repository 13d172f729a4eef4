"""Variable substitution for prompt template messages."""

import re
from typing import Any, Mapping, Optional, Sequence, Union

from .types import ContentMessage, HistoryPlaceholder, Message, PromptTemplate

# {{name}}, {{ name }} and the unescaped {{{name}}} and {{& name}} forms
MARKER_RE = re.compile(r"\{\{\{\s*([\w.\-]+)\s*\}\}\}|\{\{\s*(?:&\s*)?([\w.\-]+)\s*\}\}")

TemplateLike = Union[PromptTemplate, Mapping[str, Any]]
MessageLike = Union[Message, Mapping[str, Any]]


def _as_template(template: TemplateLike) -> PromptTemplate:
    if isinstance(template, PromptTemplate):
        return template
    return PromptTemplate.from_dict(template)


def _as_message(message: MessageLike) -> Message:
    if isinstance(message, Message):
        return message
    return Message(role=message["role"], content=message["content"])


def render_text(text: str, variables: Mapping[str, Any]) -> str:
    """Replace each marker found in ``variables``; unknown markers stay as written."""

    def substitute(match: re.Match) -> str:
        name = match.group(1) or match.group(2)
        if name not in variables:
            return match.group(0)
        return str(variables[name])

    return MARKER_RE.sub(substitute, text)


def render(
    template: TemplateLike,
    variables: Mapping[str, Any],
    history: Optional[Sequence[MessageLike]] = None,
) -> list[Message]:
    """
    Render a template's messages against ``variables``.

    History placeholders produce no output: the renderer has no access to
    the conversation, so the caller splices prior turns in at that spot.
    Passing ``history`` does the splice here instead. Media slots and
    schemas are left on the template for the caller.

    Args:
        template: A PromptTemplate or the raw JSON body from a fetch
        variables: Marker name -> value
        history: Messages to insert at each history placeholder

    Returns:
        The rendered messages, in template order
    """
    rendered: list[Message] = []
    for entry in _as_template(template).content:
        if isinstance(entry, HistoryPlaceholder):
            if history:
                rendered.extend(_as_message(m) for m in history)
            continue
        if isinstance(entry, ContentMessage):
            rendered.append(Message(role=entry.role, content=render_text(entry.content, variables)))
    return rendered


def find_variables(template: TemplateLike) -> list[str]:
    """Marker names used by the template, in first-seen order."""
    names: list[str] = []
    for entry in _as_template(template).content:
        if not isinstance(entry, ContentMessage):
            continue
        for match in MARKER_RE.finditer(entry.content):
            name = match.group(1) or match.group(2)
            if name not in names:
                names.append(name)
    return names
