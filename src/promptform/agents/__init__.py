"""
Agent definitions for promptform.

This module contains the form generator agent and the provider that wraps it.
"""

from promptform.agents.form_generator import create_form_generator_agent
from promptform.agents.provider import AgentSchemaProvider, SchemaProvider

__all__ = [
    "create_form_generator_agent",
    "AgentSchemaProvider",
    "SchemaProvider",
]
