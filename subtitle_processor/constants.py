"""Read-only glyphs and defaults shared by the formatter, the name tools and the list."""

# Canonical glyph joining the segments of a translated full name, e.g. "托尼·斯塔克".
NAME_DELIMITER = "·"

# Glyphs accepted as segment delimiters in a name dictionary target.
NAME_DELIMITERS = ("·", "/")

# Serialized output uses Windows style line endings.
EOL = "\r\n"

# Joins secondary-text fields into one block for the translate pass.
LINE_SENTINEL = "\n"

# Marks a sung lyrics line: "# la la la #".
LYRICS_MARKER = "#"

# Substrings identifying credit lines in raw captions.
CREDIT_PATTERNS = (
    "Synced and corrected by",
)
