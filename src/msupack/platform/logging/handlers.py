"""Rich console handler with structured apply-event rendering.

Where: platform/logging/handlers.py
What: Render ``apply.*`` log records as compact, iconised console lines.
Why: Keep console formatting out of the engine, which only logs extras.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class ApplyRichHandler(RichHandler):
    """Rich handler that styles apply events and shortens long paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "apply.run.start": ("🚀", "cyan"),
        "apply.run.complete": ("✅", "green"),
        "apply.run.cancelled": ("🛑", "yellow"),
        "apply.run.error": ("❌", "red"),
        "apply.conflicts.detected": ("⚠️", "yellow"),
        "apply.conflicts.resolved": ("🤝", "cyan"),
        "apply.file.write": ("📦", "magenta"),
        "apply.file.skip": ("↪️", "yellow"),
        "apply.sprite.apply": ("🎨", "blue"),
        "sprites.download": ("⬇️", "blue"),
    }
    _EVENT_LABELS: ClassVar[dict[str, str]] = {
        "apply.run.start": "Apply start",
        "apply.run.complete": "Apply complete",
        "apply.run.cancelled": "Apply cancelled",
        "apply.run.error": "Apply failed",
        "apply.conflicts.detected": "Existing files at destination",
        "apply.conflicts.resolved": "Conflicts resolved",
        "apply.file.write": "Writing ",
        "apply.file.skip": "Skipped existing ",
        "apply.sprite.apply": "Applying sprite ",
        "sprites.download": "Downloading sprite ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        super().__init__(*args, **kwargs)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _format_path(self, path: object, base: object | None = None) -> Text:
        """Render ``path`` relative to ``base`` when possible, keeping the last segments."""

        pure_path = self._to_pure_path(str(path))
        if base is not None:
            base_path = self._to_pure_path(str(base))
            try:
                relative = pure_path.relative_to(base_path)
            except ValueError:
                relative = None
            if relative is not None and str(relative) not in {"", "."}:
                pure_path = relative

        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        parts = [part for part in pure_path.parts if part and part != pure_path.anchor]
        if len(parts) > self._PATH_SEGMENT_LIMIT:
            rendered = "…" + separator + separator.join(parts[-self._PATH_SEGMENT_LIMIT:])
        elif pure_path.anchor:
            rendered = pure_path.anchor.rstrip("\\/") + separator + separator.join(parts)
        else:
            rendered = separator.join(parts) or "."

        text = Text()
        for char in rendered:
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    def _render_apply_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured apply events with dedicated styling."""

        event = getattr(record, "apply_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        step = getattr(record, "step", None)
        total_steps = getattr(record, "total_steps", None)
        if isinstance(step, int) and isinstance(total_steps, int) and total_steps > 0:
            _ = body.append(f"[{step}/{total_steps}] ")

        _ = body.append(self._EVENT_LABELS.get(event, event))

        output_dir = getattr(record, "output_dir", None)
        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        if source_path:
            _ = body.append_text(self._format_path(source_path))
            if target_path:
                _ = body.append(" → ")
        if target_path:
            _ = body.append_text(self._format_path(target_path, base=output_dir))

        details: list[str] = []
        for key in ("tracks", "mode", "conflicts", "resolution", "written", "skipped"):
            value = getattr(record, key, None)
            if value is not None:
                details.append(f"{key}={value}")
        duration = getattr(record, "duration_seconds", None)
        if isinstance(duration, (int, float)):
            details.append(f"duration={duration:.2f}s")
        if details:
            _ = body.append(" [" + ", ".join(details) + "]")

        error_message = getattr(record, "error_message", None)
        if error_message:
            _ = body.append(f" ({error_message})")

        if event.startswith("apply.run") and output_dir and not target_path:
            _ = body.append(" @ ")
            _ = body.append_text(self._format_path(output_dir))

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for apply events."""

        apply_text = self._render_apply_message(record)
        if apply_text is not None:
            return apply_text
        return super().render_message(record, message)


__all__ = ["ApplyRichHandler"]
