"""GAC constants and enumerations."""

import re
from enum import Enum

# Branch naming
WIP_PREFIX = "wip/"
CURRENT_BRANCH_MARKER = "*"

# Configuration
DEFAULT_CONFIG_PATH = ".gac/config.yaml"
DEFAULT_GIT_TIMEOUT_SECONDS = 60
DEFAULT_DEBOUNCE_SECONDS = 0.5

# Push output is read in chunks of at most this many bytes
PUSH_READ_CHUNK_BYTES = 4096

# Error text printed by git, e.g. "fatal: not a git repository"
GIT_ERROR_MARKER = re.compile(r"^[a-z]+: ", re.MULTILINE)

# Credential prompts printed by ssh/git during push
PASSPHRASE_PROMPT = re.compile(r"^Enter passphrase for key '(?P<key>.*)': ", re.MULTILINE)
USER_PASSWORD_PROMPT = re.compile(r"^(?P<user>\S.*?)'s password:", re.MULTILINE)
PASSWORD_PROMPT = re.compile(r"^[pP]assword:", re.MULTILINE)


class PushState(Enum):
    """Lifecycle state of a background push."""

    SPAWNED = "spawned"
    RUNNING = "running"
    TERMINATED = "terminated"
