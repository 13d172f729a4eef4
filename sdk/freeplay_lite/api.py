"""Freeplay endpoints: prompt templates, completions and traces."""

import logging
from typing import Any, Mapping, Optional, Sequence, Union
from urllib.parse import quote, urlencode

import httpx

from .client import HTTPClient
from .config import Configuration
from .types import (
    CallInfo,
    CompletionRecord,
    HTTPResult,
    Message,
    TemplateArgumentError,
    TraceRecord,
)

logger = logging.getLogger(__name__)

MessageLike = Union[Message, Mapping[str, Any]]


def _message_dict(message: MessageLike) -> dict:
    if isinstance(message, Message):
        return message.to_dict()
    return dict(message)


class FreeplayAPI:
    """
    Builds request payloads and hands them to an HTTPClient.

    Every method validates the configuration before touching the network
    and returns the HTTPResult unchanged; check ``result.ok`` for success.
    Nothing is retried.
    """

    def __init__(self, config: Configuration, http_client: HTTPClient):
        self.config = config
        self.http_client = http_client

    def _project_url(self, path: str) -> str:
        return self.config.url(f"/projects/{self.config.project_id}/{path}")

    def fetch_template(
        self,
        template_id: Optional[str] = None,
        version_id: Optional[str] = None,
        name: Optional[str] = None,
        environment: Optional[str] = "latest",
        format: Optional[str] = None,
        flavor_name: Optional[str] = None,
    ) -> HTTPResult:
        """
        Fetch a prompt template by id and version, or by name.

        The id/version pair wins when both modes are given. ``environment``,
        ``format`` and ``flavor_name`` only apply to lookups by name.

        Raises:
            TemplateArgumentError: neither a complete id/version pair nor a name
        """
        if template_id and version_id:
            url = self._project_url(f"prompt-templates/id/{template_id}/versions/{version_id}")
        elif name:
            # The name route rejects "+" for spaces, so encode everything as %XX
            url = self._project_url(f"prompt-templates/name/{quote(name, safe='')}")
            params = {
                key: value
                for key, value in (
                    ("environment", environment),
                    ("format", format),
                    ("flavor_name", flavor_name),
                )
                if value is not None
            }
            if params:
                url = f"{url}?{urlencode(params, quote_via=quote)}"
        else:
            raise TemplateArgumentError("Must provide either template_id + version_id, or name")

        self.config.validate()
        return self.http_client.get(url)

    def list_templates(self) -> HTTPResult:
        """List the project's prompt templates (first page)."""
        self.config.validate()
        return self.http_client.get(self._project_url("prompt-templates"))

    def record_completion(
        self,
        session_id: str,
        messages: Sequence[MessageLike],
        inputs: Mapping[str, Any],
        call_info: Optional[Union[CallInfo, Mapping[str, Any]]] = None,
        trace_id: Optional[str] = None,
        prompt_version_id: Optional[str] = None,
        environment: str = "latest",
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> HTTPResult:
        """
        Record one model interaction.

        Optional sections are only sent when they carry something:
        - prompt_info: ``prompt_version_id``, else the configured default
        - trace_info: ``trace_id`` is set
        - call_info: ``call_info`` is given (an empty mapping still counts)
        - session_info: ``metadata`` is non-empty
        """
        self.config.validate()

        record = CompletionRecord(
            messages=[_message_dict(m) for m in messages],
            inputs=dict(inputs),
        )

        # An empty configured default counts as unset
        version_id = prompt_version_id
        if version_id is None:
            version_id = self.config.prompt_version_id or None
        if version_id is not None:
            record.prompt_info = {
                "prompt_template_version_id": version_id,
                "environment": environment,
            }

        if trace_id is not None:
            record.trace_info = {"trace_id": trace_id}

        if call_info is not None:
            record.call_info = call_info.to_dict() if isinstance(call_info, CallInfo) else dict(call_info)

        if metadata:
            record.session_info = {"custom_metadata": dict(metadata)}

        url = self._project_url(f"sessions/{session_id}/completions")
        return self.http_client.post(url, record.to_dict())

    def record_trace(
        self,
        session_id: str,
        trace_id: str,
        input: Any,
        output: Any,
        agent_name: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> HTTPResult:
        """Record a trace grouping the session's completions under ``trace_id``."""
        self.config.validate()

        record = TraceRecord(input=input, output=output, agent_name=agent_name)
        if metadata:
            record.custom_metadata = dict(metadata)

        url = self._project_url(f"sessions/{session_id}/traces/id/{trace_id}")
        return self.http_client.post(url, record.to_dict())


def create_client(
    config: Optional[Configuration] = None,
    verbose: bool = False,
    transport: Optional[httpx.BaseTransport] = None,
) -> FreeplayAPI:
    """
    Create an API client.

    Call this once at application startup:

        import freeplay_lite
        client = freeplay_lite.create_client(verbose=True)
        result = client.fetch_template(name="my prompt", environment="prod")

    Args:
        config: Settings to use; read from the environment when omitted
        verbose: Log every request and response at INFO
        transport: httpx transport override, mainly for tests

    Returns:
        A FreeplayAPI bound to the configuration
    """
    if config is None:
        config = Configuration.from_env()
    logger.debug("Creating Freeplay client for %s", config.api_url)
    http_client = HTTPClient(config.api_key or "", verbose=verbose, transport=transport)
    return FreeplayAPI(config, http_client)
