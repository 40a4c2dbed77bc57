from pathlib import Path

# Tool metadata
TOOL_NAME = "emover"
TOOL_VERSION = "1.0.0"

# File encoding
DEFAULT_ENCODING = "utf-8"

# Configuration file
CONFIG_FILE_NAME = ".emover.yaml"
CONFIG_SCHEMA_FILE = "config.schema.json"
SCHEMA_DIR = Path(__file__).resolve().parents[2] / "schemas"

# Codepoint ranges (inclusive)
EMOJI_RANGES = (
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F300, 0x1F5FF),  # Misc Symbols and Pictographs
    (0x1F680, 0x1F6FF),  # Transport and Map Symbols
    (0x1F900, 0x1F9FF),  # Supplemental Symbols and Pictographs
    (0x1FA70, 0x1FAFF),  # Symbols and Pictographs Extended-A
    (0x1F1E0, 0x1F1FF),  # Regional indicators (flags)
)

SYMBOL_RANGES = (
    (0x2600, 0x26FF),  # Misc Symbols
    (0x2700, 0x27BF),  # Dingbats
    (0x2B05, 0x2B07),  # Arrows with emoji presentation
    (0x2B1B, 0x2B1C),  # Large squares
    (0x2B50, 0x2B50),  # Star
    (0x2B55, 0x2B55),  # Heavy large circle
)

# Directory pruning
HIDDEN_DIR_PREFIX = "."
ALWAYS_IGNORED_DIRS = frozenset({".git", "node_modules"})

# Exclude pattern quoting from shell invocations
PATTERN_QUOTE_CHARS = "'\""

# Null byte marks a binary file
BINARY_MARKER = b"\x00"

# Worker pool
DEFAULT_MAX_WORKERS = 8
MAX_WORKERS_LIMIT = 128

# Confirmation
CONFIRM_PROMPT = "\nRemove these emojis? This change is irreversible (y/N)"
AFFIRMATIVE_ANSWER = "y"
