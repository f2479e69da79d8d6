"""List the log-format presets."""

from __future__ import annotations

import json
from argparse import Namespace

from logview.formats import iter_presets


def run(args: Namespace) -> None:
    """Run the formats command: print each preset as a text block, or all of them as JSON."""
    if getattr(args, "as_json", False):
        data = [
            {
                "name": preset.name,
                "label": preset.label,
                "index": fmt.value,
                "format": preset.format,
                "date_format": preset.date_format,
            }
            for fmt, preset in iter_presets()
        ]
        print(json.dumps(data, indent=2))
        return

    for fmt, preset in iter_presets():
        print(f"{preset.name}  ({preset.label})")
        print(f"  format:      {preset.format}")
        print(f"  date format: {preset.date_format}")
