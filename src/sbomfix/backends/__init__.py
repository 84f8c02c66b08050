"""HTTP clients for the semantic-analysis and generative-model backends."""

from sbomfix.backends.llamaindex import LlamaIndexClient
from sbomfix.backends.ollama import OllamaClient
from sbomfix.backends.stream import NO_SCRIPT_PLACEHOLDER, aggregate_stream

__all__ = [
    "LlamaIndexClient",
    "NO_SCRIPT_PLACEHOLDER",
    "OllamaClient",
    "aggregate_stream",
]
