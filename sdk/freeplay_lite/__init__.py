"""freeplay-lite - Minimal client for Freeplay prompt templates, completions and traces."""

from .api import FreeplayAPI, create_client
from .client import HTTPClient
from .config import DEFAULT_API_URL, Configuration
from .render import find_variables, render
from .types import (
    CallInfo,
    ConfigurationError,
    FreeplayError,
    HTTPResult,
    Message,
    PromptTemplate,
    TemplateArgumentError,
    TemplatePage,
    Usage,
    estimate_message_tokens,
    estimate_tokens,
)

__all__ = [
    "FreeplayAPI",
    "create_client",
    "HTTPClient",
    "Configuration",
    "DEFAULT_API_URL",
    "render",
    "find_variables",
    "CallInfo",
    "Usage",
    "Message",
    "PromptTemplate",
    "TemplatePage",
    "HTTPResult",
    "FreeplayError",
    "ConfigurationError",
    "TemplateArgumentError",
    "estimate_tokens",
    "estimate_message_tokens",
]
__version__ = "0.1.0"
