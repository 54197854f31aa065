"""
Constants for guardrails in promptform.

Patterns and limits used to screen generation requests.
"""

# Patterns that might indicate injection attempts
SUSPICIOUS_PATTERNS = [
    r"<script",
    r"javascript:",
    r"on\w+\s*=",
    r"\{\{.*\}\}",
    r"\$\{.*\}",
    r"eval\s*\(",
    r"__proto__",
]

# Longest request accepted for generation
MAX_QUERY_LENGTH = 2000
