"""
Helpers for classifying individual hunk lines.

Hunk lines come from DiffParser, so the first character is always the
diff marker: '+', '-' or ' '.
"""

# Substrings indicating request parameter extraction in a changed line
REQUEST_PARAM_PATTERNS = (
    "params.",
    "request.json",
    "request.formData",
    "request.text",
    "request.arrayBuffer",
    "request.blob",
    "searchParams",
    "formData.get",
    "formData.getAll",
    "formData.has",
)


def is_addition(line: str) -> bool:
    """Check if a hunk line was added."""
    return line.startswith("+")


def is_deletion(line: str) -> bool:
    """Check if a hunk line was removed."""
    return line.startswith("-")


def advances_new_file(line: str) -> bool:
    """Whether a hunk line occupies a line of the new file."""
    return line.startswith(("+", " "))


def extract_line_content(line: str) -> str:
    """Strip the one character diff prefix from a line."""
    if line.startswith(("+", "-", " ")):
        return line[1:]
    return line


def contains_request_param_pattern(line: str) -> bool:
    """Check if a diff line touches request parameter handling."""
    content = extract_line_content(line)
    return any(pattern in content for pattern in REQUEST_PARAM_PATTERNS)
