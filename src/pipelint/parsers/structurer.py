#!/usr/bin/env python3
"""
PIPELINT STRUCTURER - The Forgiving Architect
---------------------------------------------
Rebuilds a workflow tree (Scalar / Mapping / Sequence) from indented
key/value/list text.

This is a best-effort subset parser, not a conformant YAML loader. Its only
job is to recover enough structure (top-level keys, job and step boundaries)
for the structural rules. It never raises on malformed content: lines it does
not understand are skipped and the tree degrades to whatever was recovered.

Author: Pipelint Team
"""

import re
import logging
from typing import List, Optional, Tuple, Union

from pipelint.models import Mapping, Scalar, Sequence

logger = logging.getLogger("pipelint.parsers.structurer")

# `|`, `>`, `|-`, `>+`, `|2`, `>2-` ...
BLOCK_INDICATOR = re.compile(r"^[|>](?:[+-]?[1-9]?|[1-9][+-])$")
# A mapping colon is followed by whitespace or ends the line ("key: v", "key:")
KEY_SEPARATOR = re.compile(r":(?=\s|$)")
INTEGER = re.compile(r"^\d+$")

# Stack frame: (indent, container, key, is_block)
#   key is None -> deeper lines populate `container` itself
#   key is set  -> deeper lines populate `container[key]`
Frame = Tuple[int, Mapping, Optional[str], bool]


def find_comment_split(text: str) -> int:
    r"""
    Finds the real '#' start point for inline comments.

    A hash starts a comment when it is outside quotes and preceded by
    whitespace (or starts the text). `url: http://x#anchor` and
    `name: "a # b"` keep their hashes.

    Returns:
        int: Index of comment start, or -1 if no comment
    """
    in_double_quote = False
    in_single_quote = False
    escaped = False

    for i, char in enumerate(text):
        if escaped:
            escaped = False
            continue
        if char == "\\" and in_double_quote:
            escaped = True
            continue
        if char == '"' and not in_single_quote:
            in_double_quote = not in_double_quote
        elif char == "'" and not in_double_quote:
            in_single_quote = not in_single_quote
        elif char == "#" and not (in_double_quote or in_single_quote):
            if i == 0 or text[i - 1].isspace():
                return i
    return -1


def strip_comment(text: str) -> str:
    idx = find_comment_split(text)
    if idx == -1:
        return text
    return text[:idx].rstrip()


def strip_quotes(text: str) -> str:
    """Removes one pair of matching surrounding quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return text


def coerce_scalar(raw: str) -> Union[str, int, bool]:
    """
    Turns a raw value into a str, int or bool.
    Quotes are stripped first; only `true`, `false` and plain digit runs convert.
    """
    value = strip_quotes(raw.strip())
    if value == "true":
        return True
    if value == "false":
        return False
    if INTEGER.match(value):
        return int(value)
    return value


def split_key_value(content: str) -> Optional[Tuple[str, str]]:
    """
    Splits `key: value` on the first mapping colon.

    Examples:
        "name: Build"      -> ("name", "Build")
        "'on': push"       -> ("on", "push")
        "steps:"           -> ("steps", "")
        "echo hello"       -> None
        "foo:bar"          -> None

    Keys are returned as plain strings and never coerced.
    """
    if not content:
        return None

    if content[0] in ('"', "'"):
        quote = content[0]
        end_idx = content.find(quote, 1)
        if end_idx != -1:
            rest = content[end_idx + 1:].lstrip()
            if rest.startswith(":") and (len(rest) == 1 or rest[1].isspace()):
                return content[1:end_idx], rest[1:].strip()
            # A fully quoted scalar such as "a: b" is not a pair
            return None

    match = KEY_SEPARATOR.search(content)
    if not match or match.start() == 0:
        return None
    key = strip_quotes(content[:match.start()].strip())
    return key, content[match.end():].strip()


class WorkflowStructurer:
    """
    The Architect: rebuilds the workflow tree from raw text in a single
    top-down pass using an explicit indentation stack.
    """

    def parse(self, text: str) -> Mapping:
        """Parses `text` into a root Mapping. Never raises on content."""
        root = Mapping(line=None)
        stack: List[Frame] = [(-1, root, None, False)]
        skipped = 0

        for line_no, raw_line in enumerate(text.split("\n"), start=1):
            stripped = raw_line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            indent = len(raw_line) - len(raw_line.lstrip())
            content = strip_comment(stripped)
            if not content:
                continue

            is_item = content == "-" or content.startswith("- ")
            self._unwind(stack, indent, is_item)

            _, container, key, is_block = stack[-1]
            if is_block:
                # Block scalar body: never reinterpreted as structure
                continue

            if is_item:
                handled = self._add_item(stack, container, key, content, indent, line_no)
            else:
                handled = self._add_pair(stack, container, key, content, indent, line_no)

            if not handled:
                skipped += 1
                logger.debug(f"Line {line_no}: skipped unrecognized content '{content}'")

        if skipped:
            logger.debug(f"Structurer skipped {skipped} line(s)")
        return root

    # =========================================================================
    # STACK MANAGEMENT (Indentation Physics)
    # =========================================================================

    def _unwind(self, stack: List[Frame], indent: int, is_item: bool):
        """Pops deeper (and same-level) scopes until the owning frame is on top."""
        while len(stack) > 1:
            f_indent, f_container, f_key, f_block = stack[-1]
            if f_indent < indent:
                break

            # Indentless sequence: "steps:" followed by "- uses: ..." at the same column
            if f_indent == indent and is_item and f_key is not None and not f_block:
                value = f_container.get(f_key)
                if isinstance(value, Sequence) or (isinstance(value, Mapping) and not len(value)):
                    break

            stack.pop()

    # =========================================================================
    # CONTAINER POPULATION
    # =========================================================================

    def _add_pair(self, stack: List[Frame], container: Mapping, key: Optional[str],
                  content: str, indent: int, line_no: int) -> bool:
        pair = split_key_value(content)
        if pair is None:
            return False

        target = container if key is None else container.get(key)
        if not isinstance(target, Mapping):
            return False

        new_key, raw_value = pair
        self._assign(stack, target, new_key, raw_value, indent, line_no)
        return True

    def _add_item(self, stack: List[Frame], container: Mapping, key: Optional[str],
                  content: str, indent: int, line_no: int) -> bool:
        if key is None:
            # A list marker with no enclosing key (e.g. at document root)
            return False

        seq = container.get(key)
        if not isinstance(seq, Sequence):
            if isinstance(seq, Mapping) and len(seq):
                # A stray item inside a populated mapping does not rewrite it
                return False
            seq = Sequence(line=line_no)
            container.set(key, seq)

        rest = content[1:]
        item_text = rest.strip()

        if not item_text:
            item = Mapping(line=line_no)
            seq.append(item)
            stack.append((indent, item, None, False))
            return True

        pair = split_key_value(item_text)
        if pair is None:
            seq.append(Scalar(strip_quotes(item_text), line=line_no))
            return True

        item = Mapping(line=line_no)
        seq.append(item)
        stack.append((indent, item, None, False))

        # Column of the inline key: children of an empty inline value sit deeper than it
        content_col = indent + 1 + (len(rest) - len(rest.lstrip()))
        item_key, raw_value = pair
        self._assign(stack, item, item_key, raw_value, content_col, line_no)
        return True

    def _assign(self, stack: List[Frame], target: Mapping, key: str, raw_value: str,
                indent: int, line_no: int):
        """Stores one key/value and opens a scope for empty or block values."""
        if not raw_value:
            target.set(key, Mapping(line=line_no), line_no)
            stack.append((indent, target, key, False))
        elif BLOCK_INDICATOR.match(raw_value):
            target.set(key, Scalar("", line=line_no), line_no)
            stack.append((indent, target, key, True))
        else:
            target.set(key, Scalar(coerce_scalar(raw_value), line=line_no), line_no)
