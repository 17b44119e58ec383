"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send a free-text query to Groq with a strict JSON-schema output contract.
- Validate the model output into a typed search intent.
- Log provider diagnostics and raise a generic error when the model fails.
"""
