"""JSON text utilities.

Model output frequently wraps JSON in Markdown code fences; these helpers
clean it up before decoding.
"""


def strip_markdown_code_fence(text: str) -> str:
    """Remove markdown code fence markers from text.

    Strips ```json, ```, and trailing ``` from text before parsing.

    Args:
        text: Text potentially wrapped in markdown code fences

    Returns:
        Cleaned text with code fences removed
    """
    cleaned = text.strip()

    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]

    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]

    return cleaned.strip()
