"""A small pull parser that turns XML text into a flat stream of events."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto

__all__ = ["EventKind", "XmlEvent", "XmlSyntaxError", "read_events", "unescape"]

_WHITESPACE = " \t\r\n"
_NAME = re.compile(r"[^\s/>]+")
_ATTRIBUTE = re.compile(r"""\s*([^\s=/>"']+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_TAG_BODY = re.compile(r"""(?:[^>"']+|"[^"]*"|'[^']*')*""")
_DECIMAL = re.compile(r"[0-9]+")
_HEXADECIMAL = re.compile(r"[0-9a-fA-F]+")
_PREDEFINED = {"lt": "<", "gt": ">", "amp": "&", "apos": "'", "quot": '"'}


class XmlSyntaxError(ValueError):
    """Raised when the input is not well-formed enough to go on reading."""


class EventKind(Enum):
    START = auto()
    END = auto()
    EMPTY = auto()
    TEXT = auto()
    CDATA = auto()
    COMMENT = auto()
    DECL = auto()
    PI = auto()
    DOCTYPE = auto()
    EOF = auto()


@dataclass(frozen=True)
class XmlEvent:
    """One event of the stream.

    ``name`` is the qualified tag name (prefix included), ``attributes`` hold
    raw, still escaped values, and ``text`` holds raw, still escaped text.
    """

    kind: EventKind
    name: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    text: str = ""


def unescape(text: str) -> str:
    """Replace predefined entities and character references in ``text``."""
    parts: list[str] = []
    pos = 0
    while (amp := text.find("&", pos)) != -1:
        semicolon = text.find(";", amp + 1)
        if semicolon == -1:
            raise XmlSyntaxError(f"unterminated entity reference at offset {amp}")
        parts.append(text[pos:amp])
        parts.append(_resolve_entity(text[amp + 1 : semicolon]))
        pos = semicolon + 1
    parts.append(text[pos:])
    return "".join(parts)


def _resolve_entity(entity: str) -> str:
    if entity in _PREDEFINED:
        return _PREDEFINED[entity]
    if entity.startswith("#x"):
        digits, pattern, base = entity[2:], _HEXADECIMAL, 16
    elif entity.startswith("#"):
        digits, pattern, base = entity[1:], _DECIMAL, 10
    else:
        raise XmlSyntaxError(f"unknown entity &{entity};")
    if not pattern.fullmatch(digits):
        raise XmlSyntaxError(f"invalid character reference &{entity};")
    try:
        return chr(int(digits, base))
    except (ValueError, OverflowError):
        raise XmlSyntaxError(f"invalid character reference &{entity};") from None


def read_events(content: str, trim_text: bool = True) -> Iterator[XmlEvent]:
    """Yield the events of ``content`` in document order, ending with EOF.

    With ``trim_text`` the text events are stripped of surrounding whitespace
    and whitespace-only text is dropped. Malformed markup raises
    :class:`XmlSyntaxError` once the events before it have been yielded.
    """
    pos = 1 if content.startswith("\ufeff") else 0
    open_tags: list[str] = []
    while pos < len(content):
        lt = content.find("<", pos)
        if lt == -1:
            text_event = _text_event(content[pos:], trim_text)
            if text_event is not None:
                yield text_event
            break
        if lt > pos:
            text_event = _text_event(content[pos:lt], trim_text)
            if text_event is not None:
                yield text_event
        event, pos = _markup_event(content, lt, open_tags)
        yield event
    yield XmlEvent(EventKind.EOF)


def _text_event(raw: str, trim_text: bool) -> XmlEvent | None:
    if trim_text:
        raw = raw.strip(_WHITESPACE)
    return XmlEvent(EventKind.TEXT, text=raw) if raw else None


def _find(content: str, needle: str, start: int, what: str) -> int:
    index = content.find(needle, start)
    if index == -1:
        raise XmlSyntaxError(f"unterminated {what} starting at offset {start}")
    return index


def _markup_event(content: str, pos: int, open_tags: list[str]) -> tuple[XmlEvent, int]:
    if content.startswith("<!--", pos):
        end = _find(content, "-->", pos + 4, "comment")
        return XmlEvent(EventKind.COMMENT, text=content[pos + 4 : end]), end + 3
    if content.startswith("<![CDATA[", pos):
        end = _find(content, "]]>", pos + 9, "CDATA section")
        return XmlEvent(EventKind.CDATA, text=content[pos + 9 : end]), end + 3
    if content.startswith("<!", pos):
        end = _doctype_end(content, pos + 2)
        return XmlEvent(EventKind.DOCTYPE, text=content[pos + 2 : end].strip(_WHITESPACE)), end + 1
    if content.startswith("<?", pos):
        end = _find(content, "?>", pos + 2, "processing instruction")
        body = content[pos + 2 : end]
        target = body.split(None, 1)[0] if body.strip() else ""
        kind = EventKind.DECL if target == "xml" else EventKind.PI
        return XmlEvent(kind, name=target, text=body), end + 2
    if content.startswith("</", pos):
        end = _find(content, ">", pos + 2, "closing tag")
        name = content[pos + 2 : end].strip(_WHITESPACE)
        if not open_tags:
            raise XmlSyntaxError(f"closing tag </{name}> has no opening tag")
        expected = open_tags.pop()
        if name != expected:
            raise XmlSyntaxError(f"expected </{expected}>, found </{name}>")
        return XmlEvent(EventKind.END, name=name), end + 1

    end = _TAG_BODY.match(content, pos + 1).end()
    if end >= len(content) or content[end] != ">":
        raise XmlSyntaxError(f"unterminated tag starting at offset {pos}")
    inner = content[pos + 1 : end]
    is_empty = inner.endswith("/")
    if is_empty:
        inner = inner[:-1]
    name, attributes = _parse_tag(inner, pos)
    if is_empty:
        return XmlEvent(EventKind.EMPTY, name=name, attributes=attributes), end + 1
    open_tags.append(name)
    return XmlEvent(EventKind.START, name=name, attributes=attributes), end + 1


def _doctype_end(content: str, start: int) -> int:
    depth = 0
    quote = ""
    for index, char in enumerate(content[start:], start):
        if quote:
            if char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == ">" and depth <= 0:
            return index
    raise XmlSyntaxError(f"unterminated declaration starting at offset {start}")


def _parse_tag(inner: str, offset: int) -> tuple[str, dict[str, str]]:
    name_match = _NAME.match(inner)
    if name_match is None:
        raise XmlSyntaxError(f"tag without a name at offset {offset}")
    name = name_match.group()
    attributes: dict[str, str] = {}
    pos = name_match.end()
    while (attribute := _ATTRIBUTE.match(inner, pos)) is not None:
        key = attribute.group(1)
        value = attribute.group(2) if attribute.group(2) is not None else attribute.group(3)
        if key in attributes:
            raise XmlSyntaxError(f"duplicate attribute {key!r} in <{name}>")
        attributes[key] = value
        pos = attribute.end()
    if inner[pos:].strip(_WHITESPACE):
        raise XmlSyntaxError(f"malformed attributes in <{name}> at offset {offset}")
    return name, attributes