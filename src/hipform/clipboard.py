"""
Clipboard sinks for an export Payload.

Strategies, tried in order by copy_payload():
1) RichClipboardSink: a single Tk clipboard write carrying the HTML table
   as 'text/html' and the tab-separated text as the plain string type, so
   the receiving application picks whichever it understands.
2) PlainTextClipboardSink: pyperclip, plain text only.
3) HiddenWidgetClipboardSink: last resort without programmatic clipboard
   access. Puts the plain text into an off-screen Tk Text widget, selects it
   all and fires the <<Copy>> virtual event, then discards the widget.

Both Tk strategies write through a Tk root owned by the host session. On X11
that root is the clipboard owner and the content is gone once it is
destroyed, so a Tk sink without such a root refuses to write. Short-lived
processes (the CLI) get the pyperclip strategy only.

Environment flags
----------------------------------------
HIPFORM_SKIP_TK=1 : Leave out both Tk strategies (headless hosts, CI).
"""

import abc
import logging
import os
import typing

import pyperclip

from .export import Payload

LOGGER = logging.getLogger(__name__)

# Tk serves the default STRING format as Latin-1
HTML_CLIPBOARD_FORMAT = "UTF8_STRING"


class ClipboardError(Exception):
    """A sink could not place the payload on the clipboard."""


class ClipboardSink(metaclass=abc.ABCMeta):
    name: str = "clipboard"

    @abc.abstractmethod
    def write(self, payload: Payload) -> None:
        # raise ClipboardError when the write did not happen
        raise NotImplementedError


def _import_tk():
    try:
        import tkinter
    except ImportError as e:
        raise ClipboardError(f"Tk is not available: {e}") from e
    return tkinter


class _TkClipboardSink(ClipboardSink):
    def __init__(self, root: typing.Any = None):
        # long-lived tkinter.Tk of the host session; it stays the clipboard owner
        self.root = root

    def _owner(self) -> typing.Any:
        if self.root is None:
            raise ClipboardError("no persistent Tk root to own the clipboard")
        return self.root


class RichClipboardSink(_TkClipboardSink):
    name = "rich (text/html + text/plain)"

    def write(self, payload: Payload) -> None:
        root = self._owner()
        tkinter = _import_tk()
        try:
            root.clipboard_clear()
            root.clipboard_append(payload.markup, type="text/html", format=HTML_CLIPBOARD_FORMAT)
            root.clipboard_append(payload.plain)
            root.update()
        except tkinter.TclError as e:
            raise ClipboardError(f"Tk clipboard write failed: {e}") from e


class PlainTextClipboardSink(ClipboardSink):
    name = "plain text"

    def write(self, payload: Payload) -> None:
        try:
            pyperclip.copy(payload.plain)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"pyperclip could not copy: {e}") from e


class HiddenWidgetClipboardSink(_TkClipboardSink):
    name = "hidden widget copy"

    def write(self, payload: Payload) -> None:
        root = self._owner()
        tkinter = _import_tk()
        widget = None
        try:
            widget = tkinter.Text(root)
            widget.place(x=-999999, y=-999999)
            widget.insert("1.0", payload.plain)
            widget.focus_set()
            widget.tag_add("sel", "1.0", "end-1c")
            widget.event_generate("<<Copy>>")
            root.update()
        except tkinter.TclError as e:
            raise ClipboardError(f"Copy from hidden widget failed: {e}") from e
        finally:
            if widget is not None:
                widget.destroy()


def _skip_tk() -> bool:
    return os.getenv("HIPFORM_SKIP_TK", "").strip().lower() in {"1", "true", "yes"}


def default_sinks(root: typing.Any = None) -> list[ClipboardSink]:
    """
    The fallback chain for a session. The Tk strategies are only offered
    when the caller owns a Tk root that outlives the copy.
    """
    if root is None or _skip_tk():
        return [PlainTextClipboardSink()]
    return [RichClipboardSink(root), PlainTextClipboardSink(), HiddenWidgetClipboardSink(root)]


def copy_payload(payload: Payload, sinks: typing.Optional[typing.Sequence[ClipboardSink]] = None) -> bool:
    """
    Hand the payload to each sink in turn until one succeeds.
    Returns False (after logging) when every sink failed; never raises ClipboardError.
    """
    if sinks is None:
        sinks = default_sinks()
    for sink in sinks:
        try:
            sink.write(payload)
        except ClipboardError as e:
            LOGGER.warning(f"Clipboard strategy {sink.name!r} failed: {e}")
            continue
        LOGGER.debug(f"Copied export via {sink.name!r}")
        return True
    LOGGER.error("Failed to copy export: no clipboard strategy succeeded")
    return False
