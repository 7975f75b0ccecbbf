"""
Human Log -- Formatter and helper for operator-facing progress lines.

Example output of `skillsync sync`:

    ✓ Submodules updated
      slidev → slidev
      ⚠  Skill not found: vendor/vueuse/skills/vueuse-functions
      vue-best-practices → vue-best-practices

    ⚡ Skills synced (2 synced, 1 skipped, 0 failed)
"""

import logging
import sys

from .levels import HUMAN

# LogRecord attributes that are never event parameters
_RECORD_ATTRS = frozenset((
    "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "message",
    "taskName", "name", "event",
))


class HumanFormatter:
    """Turns structured operation events into readable lines."""

    def format_event(self, event: str, **kw) -> str | None:
        """Format an event, or return None if it has no human form."""
        match event:

            # ── INIT ─────────────────────────────────────────────────────
            case "init.nothing_new":
                return "All submodules already initialized"

            case "init.cancelled":
                return "Cancelled"

            case "init.adding":
                return f"  Adding submodule: {kw.get('name', '?')}"

            case "init.submodule_added":
                return f"    Added: {kw.get('name', '?')}"

            case "init.submodule_failed":
                return f"    ✗ Failed to add {kw.get('name', '?')}: {kw.get('error', '?')}"

            case "init.complete":
                added = kw.get("added", 0)
                failed = kw.get("failed", 0)
                if failed:
                    return f"\n⚡ Submodules initialized ({added} added, {failed} failed)"
                return f"\n✓ Submodules initialized ({added} added)"

            case "init.already_initialized":
                names = kw.get("names") or []
                return f"Already initialized: {', '.join(names)}"

            # ── SYNC ─────────────────────────────────────────────────────
            case "sync.submodules_updated":
                return "✓ Submodules updated"

            case "sync.skill_synced":
                return f"  {kw.get('source', '?')} → {kw.get('output', '?')}"

            case "sync.vendor_missing":
                return f"  ⚠  Vendor submodule not found: {kw.get('vendor', '?')}. Run init first."

            case "sync.skills_dir_missing":
                return f"  ⚠  No skills directory in vendor/{kw.get('vendor', '?')}/skills/"

            case "sync.skill_missing":
                return f"  ⚠  Skill not found: {kw.get('path', '?')}"

            case "sync.skill_failed":
                return f"  ✗ Failed to sync {kw.get('source', '?')}: {kw.get('error', '?')}"

            case "sync.complete":
                synced = kw.get("synced", 0)
                skipped = kw.get("skipped", 0)
                failed = kw.get("failed", 0)
                if not skipped and not failed:
                    return f"\n✓ All skills synced ({synced} synced)"
                return f"\n⚡ Skills synced ({synced} synced, {skipped} skipped, {failed} failed)"

            # ── CHECK ────────────────────────────────────────────────────
            case "check.fetched":
                return "✓ Fetched remote changes"

            case "check.updates_available":
                return "\nUpdates available:"

            case "check.behind":
                label = kw.get("label", "?")
                kind = kw.get("kind", "?")
                behind = kw.get("behind", "?")
                return f"  {label} ({kind}): {behind} commits behind"

            case "check.up_to_date":
                return "\n✓ All submodules are up to date"

            case _:
                return None


class HumanLogHandler(logging.Handler):
    """Logging handler that renders HUMAN records with HumanFormatter.

    Ignores every other level. Writes to stderr to keep stdout clean.
    """

    def __init__(self, stream=None) -> None:
        super().__init__(level=HUMAN)
        self.stream = stream or sys.stderr
        self.formatter_inst = HumanFormatter()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if record.levelno != HUMAN:
                return

            # ProcessorFormatter.wrap_for_formatter leaves the event dict in msg
            if isinstance(record.msg, dict):
                kw = dict(record.msg)
                event = kw.pop("event", "")
            else:
                event = getattr(record, "event", None) or record.getMessage()
                kw = {
                    k: v for k, v in record.__dict__.items()
                    if not k.startswith("_") and k not in _RECORD_ATTRS
                }

            formatted = self.formatter_inst.format_event(event, **kw)
            if formatted is not None:
                self.stream.write(formatted + "\n")
                self.stream.flush()
        except Exception:
            self.handleError(record)


class HumanLog:
    """Typed helper to emit HUMAN-level events.

    Usage:
        hlog = HumanLog(structlog.get_logger())
        hlog.skill_synced("slidev", "slidev", "slidev")
    """

    def __init__(self, logger) -> None:
        self._log = logger

    def emit(self, event: str, **kw) -> None:
        self._log.log(HUMAN, event, **kw)

    def nothing_new(self) -> None:
        self.emit("init.nothing_new")

    def cancelled(self) -> None:
        self.emit("init.cancelled")

    def adding(self, name: str) -> None:
        self.emit("init.adding", name=name)

    def submodule_added(self, name: str) -> None:
        self.emit("init.submodule_added", name=name)

    def submodule_failed(self, name: str, error: str) -> None:
        self.emit("init.submodule_failed", name=name, error=error)

    def init_complete(self, added: int, failed: int) -> None:
        self.emit("init.complete", added=added, failed=failed)

    def already_initialized(self, names: list[str]) -> None:
        self.emit("init.already_initialized", names=names)

    def submodules_updated(self) -> None:
        self.emit("sync.submodules_updated")

    def skill_synced(self, vendor: str, source: str, output: str) -> None:
        self.emit("sync.skill_synced", vendor=vendor, source=source, output=output)

    def sync_complete(self, synced: int, skipped: int, failed: int) -> None:
        self.emit("sync.complete", synced=synced, skipped=skipped, failed=failed)

    def fetched(self) -> None:
        self.emit("check.fetched")

    def updates_available(self, count: int) -> None:
        self.emit("check.updates_available", count=count)

    def behind(self, label: str, kind: str, behind: int) -> None:
        self.emit("check.behind", label=label, kind=kind, behind=behind)

    def up_to_date(self) -> None:
        self.emit("check.up_to_date")
