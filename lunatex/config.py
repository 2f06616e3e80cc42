# lunatex/config.py
import os
from typing import Dict, Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .schemas import ContentKind, NoteStyle

# --- Input dispatch ---
EXTENSION_KINDS: Dict[str, ContentKind] = {
    '.lua': 'lua',
    '.py': 'python',
    '.txt': 'text',
}

# --- Note style ---
STYLE_ENV_VAR = "LUNATEX_NOTE_STYLE"


def load_note_style(path: Optional[str] = None) -> NoteStyle:
    """
    Loads the Lua note layout from a YAML file.

    Falls back to the LUNATEX_NOTE_STYLE environment variable, then to the
    built-in defaults. An empty file also yields the defaults.
    """
    path = path or os.getenv(STYLE_ENV_VAR)
    if not path:
        return NoteStyle()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Note style file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Note style file is not valid YAML: {path} ({e})") from e

    if data is None:
        return NoteStyle()
    if not isinstance(data, dict):
        raise ConfigError(f"Note style file must contain a mapping, got {type(data).__name__}.")
    try:
        return NoteStyle.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid note style in {path}:\n{e}") from e
