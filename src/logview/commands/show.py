"""Show the config file used, the effective argument vector and the resolved options."""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from typing import Any

from logview.config import LoadStatus
from logview.formats import lookup_preset_by_string

# Namespace attributes that are bookkeeping, not options
_INTERNAL_KEYS = {"run", "command", "config_path", "config_status", "effective_argv", "date_format_resolved"}


def _options_dict(args: Namespace) -> dict[str, Any]:
    """Options from the parsed namespace, JSON-serializable, sorted by name."""
    options: dict[str, Any] = {}
    for key, value in sorted(vars(args).items()):
        if key in _INTERNAL_KEYS:
            continue
        options[key] = value.as_posix() if isinstance(value, Path) else value
    return options


def run(args: Namespace) -> None:
    """Run the show command: print config source, argv and resolved options as JSON."""
    config_path = getattr(args, "config_path", None)
    status = getattr(args, "config_status", LoadStatus.NOT_FOUND)
    log_format = getattr(args, "log_format", None)
    preset = lookup_preset_by_string(log_format)

    out = {
        "config_file": config_path.as_posix() if config_path is not None else None,
        "config_status": status.value,
        "argv": list(getattr(args, "effective_argv", [])),
        "options": _options_dict(args),
        "log_format": {
            "preset": preset.name if preset is not None else None,
            "format": log_format,
            "date_format": getattr(args, "date_format_resolved", None),
        },
    }
    print(json.dumps(out, indent=2))
