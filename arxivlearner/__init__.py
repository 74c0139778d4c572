"""ArxivLearner LLM routing and streaming layer."""

__version__ = "0.1.0"
