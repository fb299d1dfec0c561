import logging
from pathlib import Path
from typing import List, Optional

from ..device.grbl import GrblDevice
from ..protocol.models import Setting


def _sort_key(setting: Setting):
    # Numeric codes first, in numeric order
    if setting.code.isdigit():
        return (0, int(setting.code), "")
    return (1, 0, setting.code)


def format_settings(settings: List[Setting]) -> str:
    """Formats settings as aligned ``$code = value  (units) name`` rows."""
    if not settings:
        return "(No settings received)"

    max_key_len = max(len(s.code) for s in settings) + 1
    max_value_len = max(len(s.value) for s in settings)
    lines = []
    for s in sorted(settings, key=_sort_key):
        key = f"${s.code}".ljust(max_key_len + 1)
        row = f"  {key}= {s.value.ljust(max_value_len)}"
        if s.setting:
            units = f" ({s.units})" if s.units else ""
            row += f"  {s.setting}{units}"
        lines.append(row)
    return "\n".join(lines)


async def show_settings(device: GrblDevice, output: Optional[Path]) -> int:
    """
    Retrieves and displays every ``$`` setting, optionally saving the raw
    ``$code=value`` lines to ``output`` so they can be replayed later.
    """
    log = logging.getLogger("Settings")
    log.debug("Retrieving controller settings...")
    settings = await device.settings()
    log.debug(f"Received {len(settings)} settings")

    print("\nController Settings:")
    print("-" * 50)
    print(format_settings(settings))
    print("-" * 50)
    print(f"Total: {len(settings)} settings")

    if output:
        try:
            with open(output, 'w') as f:
                for s in settings:
                    f.write(f"${s.code}={s.value}\n")
            log.info(f"Settings saved to: {output}")
        except OSError as e:
            log.error(f"Error saving settings: {str(e)}")
            return 1

    return 0
