"""
Agent instructions for promptform.

Prompt text for the form generator lives here so it can be tuned without
touching the orchestration code.
"""


FORM_GENERATOR_INSTRUCTIONS = """You are an expert form builder. You turn a short
natural-language request into a structured form definition.

Always answer with a single JSON object and nothing else. Do not wrap it in
prose. The object must match the output schema you are given.
"""


FORM_GENERATION_PROMPT_TEMPLATE = """Generate a structured form based on the following user request.

User Request:
{query}

The output must be a JSON object matching this JSON Schema:
{output_schema}

Field types:
- NAME, SINGLE_LINE: short text
- EMAIL: an email address
- PHONE: a phone number
- MULTI_LINE, ADDRESS: longer text
- DATE: a calendar date (YYYY-MM-DD)
- DROPDOWN, RADIO: exactly one of `choices`
- CHECKBOX, MULTIPLE_CHOICE: any subset of `choices`
- RATING: a score from 1 to 5
- FILE_UPLOAD: an uploaded file
- SIGNATURE: a typed signature
- GRID: `gridOptions` are the columns, `choices` are the rows

Guidelines:
- Make fields relevant to the request
- Mark important fields as mandatory (mandatory: true)
- Include appropriate field types for the use case
- DROPDOWN, RADIO, CHECKBOX and MULTIPLE_CHOICE fields need non-empty `choices`
- GRID fields need non-empty `gridOptions`
- Add validation rules (minLength, maxLength, pattern) where needed
- Give every field a unique fieldId in snake_case
- Ensure field displayNames are user-friendly
- Pick the category that fits best: {categories}
"""
