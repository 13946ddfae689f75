"""Text shown while a download is in progress."""

from __future__ import annotations

MEBIBYTE = 0x100000

PROGRESS_TEMPLATE = "{:.2f}MB of {:.2f}MB ({:.2f}MB/s)"
TIME_LEFT_TEMPLATE = "Time left: {}"


def format_label_text(speed: float, current: float, total: float) -> str:
    """Describe download progress in MiB and, while data flows, the time left.

    speed is in bytes per second; current and total are byte counts.
    """
    current_mb = current / MEBIBYTE
    total_mb = total / MEBIBYTE
    speed_mb = speed / MEBIBYTE

    text = PROGRESS_TEMPLATE.format(current_mb, total_mb, speed_mb)
    if speed_mb > 0:
        remaining = (total - current) / speed
        hours = int(remaining / 3600)
        minutes = int((remaining - hours * 3600) / 60)
        seconds = int(remaining - hours * 3600 - minutes * 60)
        eta = ""
        if hours > 0:
            eta += f"{hours}h "
        if minutes > 0:
            eta += f"{minutes}m "
        eta += f"{seconds}s"
        text += "\n" + TIME_LEFT_TEMPLATE.format(eta)
    return text