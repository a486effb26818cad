"""Language-model gateway: prompt templates, transport and reply payloads."""

from orientlink.gateway.client import ChatCompletionClient, OpenAIChatClient
from orientlink.gateway.model_gateway import ModelGateway, get_default_model_gateway

__all__ = [
    "ChatCompletionClient",
    "ModelGateway",
    "OpenAIChatClient",
    "get_default_model_gateway",
]
