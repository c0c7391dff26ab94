"""Shell-like tokenizer for chat command lines.

Splits on unquoted spaces/tabs, honours double quotes and backslash
escapes. Never raises: malformed quoting degrades to best-effort tokens.

Examples:
    ;showtime -list                 -> [";showtime", "-list"]
    -title="A \\"Great\\" Movie"      -> ['-title=A "Great" Movie']
    -title=My\\ Movie                -> ["-title=My Movie"]
    -title=Movie"Night"             -> ["-title=MovieNight"]
    ""                              -> [""]
"""

SEPARATORS = frozenset(" \t")

# Escapes with a non-literal expansion
ESCAPE_EXPANSIONS = {
    "t": "\t",
    "n": "\n",
    "r": "\r",
}

# Escaping these suppresses their meaning; any other escape keeps its backslash
ESCAPE_LITERALS = frozenset(" \t\"\\")


def tokenize(line: str) -> list[str]:
    """Split a raw chat line into argument tokens."""
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaped = False

    for char in line:
        if escaped:
            if char in ESCAPE_EXPANSIONS:
                current.append(ESCAPE_EXPANSIONS[char])
            elif char in ESCAPE_LITERALS:
                current.append(char)
            else:
                current.append("\\" + char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            if in_quotes:
                # Closing quote always yields a token, even an empty one
                tokens.append("".join(current))
                current = []
            in_quotes = not in_quotes
        elif char in SEPARATORS and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    # A dangling backslash is dropped; an unterminated quote keeps its text
    if current:
        tokens.append("".join(current))

    return tokens
