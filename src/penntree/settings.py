"""
    penntree: Penn Treebank trees for Python

    Settings module

    Copyright (C) 2021 Miðeind ehf.

    This software is licensed under the MIT License:

        Permission is hereby granted, free of charge, to any person
        obtaining a copy of this software and associated documentation
        files (the "Software"), to deal in the Software without restriction,
        including without limitation the rights to use, copy, modify, merge,
        publish, distribute, sublicense, and/or sell copies of the Software,
        and to permit persons to whom the Software is furnished to do so,
        subject to the following conditions:

        The above copyright notice and this permission notice shall be
        included in all copies or substantial portions of the Software.

        THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
        EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
        MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
        IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
        CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
        TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
        SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

    This module loads the head rule tables used by the head finders
    from config/HeadRules.conf, which pulls in one file per language
    with $include. Lines are grouped under [ section ] headers and
    anything after a # is ignored.

    The [ settings ] section holds key = value pairs, currently the
    fallback direction of each language (english_fallback = none etc.).
    A head rule section, such as [ english_head_rules ], has one rule
    per line:

        PARENT direction CHILD1 CHILD2 ...

    where direction is initial or final, and the children are listed
    in decreasing order of priority.

"""

from typing import Callable, Dict, List, Optional, Tuple

import logging
import threading

from collections import defaultdict

from .basics import ConfigError, Direction, LineReader


logger = logging.getLogger(__name__)

# The configuration file read when the package is imported
DEFAULT_CONFIG = "config/HeadRules.conf"

# A head rule as read from the configuration file: direction, priority list
HeadRuleSpec = Tuple[Direction, List[str]]


class HeadRules:

    """The head rule tables and fallback directions of each
    language, as read by Settings.read()"""

    # Dictionary of language: { parent label: rule spec }
    TABLES: Dict[str, Dict[str, HeadRuleSpec]] = defaultdict(dict)
    # Dictionary of language: fallback direction for unknown parent labels
    FALLBACK: Dict[str, Direction] = {}

    @staticmethod
    def add(language: str, parent: str, direction: Direction, match: List[str]) -> None:
        """Add the rule for parent to the table of language"""
        table = HeadRules.TABLES[language]
        if parent in table:
            raise ConfigError(
                "Head rule for '{0}' is defined more than once".format(parent)
            )
        table[parent] = (direction, match)

    @staticmethod
    def set_fallback(language: str, direction: Direction) -> None:
        HeadRules.FALLBACK[language] = direction

    @staticmethod
    def table(language: str) -> Dict[str, HeadRuleSpec]:
        """Return the head rule table for the given language"""
        if language not in HeadRules.TABLES:
            raise ConfigError("No head rules for language '{0}'".format(language))
        return HeadRules.TABLES[language]

    @staticmethod
    def fallback(language: str) -> Direction:
        """Return the fallback direction for the given language,
        Direction.UNKNOWN if there is none"""
        return HeadRules.FALLBACK.get(language, Direction.UNKNOWN)

    @staticmethod
    def clear() -> None:
        HeadRules.TABLES.clear()
        HeadRules.FALLBACK.clear()


class Settings:

    _lock = threading.Lock()
    loaded = False

    @staticmethod
    def _handle_settings(s: str) -> None:
        """Handle config parameters in the settings section"""
        a = s.lower().split("=", maxsplit=1)
        if len(a) != 2:
            raise ConfigError("Expected key = value in settings section")
        par = a[0].strip()
        val = a[1].strip()
        if par.endswith("_fallback") and len(par) > len("_fallback"):
            HeadRules.set_fallback(par[: -len("_fallback")], Direction.from_name(val))
        else:
            raise ConfigError("Unknown configuration parameter '{0}'".format(par))

    @staticmethod
    def _head_rule_handler(language: str) -> Callable[[str], None]:
        """Return a handler for a head rule section of the given language"""

        def handler(s: str) -> None:
            a = s.split()
            if len(a) < 2:
                raise ConfigError(
                    "Head rule must specify a parent label and a direction"
                )
            direction = Direction.from_name(a[1])
            if direction == Direction.UNKNOWN:
                raise ConfigError("Head rule direction must be initial or final")
            if len(set(a[2:])) != len(a) - 2:
                raise ConfigError(
                    "Head rule for '{0}' lists a child label twice".format(a[0])
                )
            HeadRules.add(language, a[0], direction, a[2:])

        return handler

    @staticmethod
    def read(fname: str, force: bool = False, package: bool = True) -> None:
        """Read configuration file. The file name is relative to the
        package unless package is False. Any tables read before are
        discarded. If reading fails, the tables are left incomplete
        and the next call reads the configuration again."""

        with Settings._lock:

            if Settings.loaded and not force:
                return

            Settings.loaded = False
            HeadRules.clear()

            section_handlers: Dict[str, Callable[[str], None]] = {
                "settings": Settings._handle_settings,
                "english_head_rules": Settings._head_rule_handler("english"),
                "chinese_head_rules": Settings._head_rule_handler("chinese"),
            }
            handler: Optional[Callable[[str], None]] = None

            rdr = LineReader(fname, package_name=__name__ if package else None)
            try:
                for s in rdr.lines():
                    s = s.split("#", maxsplit=1)[0].strip()
                    if not s:
                        continue
                    if s.startswith("[") and s.endswith("]"):
                        section = s[1:-1].strip().lower()
                        handler = section_handlers.get(section)
                        if handler is None:
                            raise ConfigError(
                                "Unknown section name '{0}'".format(section)
                            )
                    elif handler is None:
                        raise ConfigError(
                            "Head rule or setting outside of a section: '{0}'".format(s)
                        )
                    else:
                        handler(s)
            except ConfigError as e:
                # Point at the line being read, unless the
                # error already carries a position
                e.set_pos(rdr.fname(), rdr.line())
                raise

            logger.debug(
                "Read head rules from %s: %s",
                fname,
                ", ".join(
                    "{0} ({1})".format(lang, len(table))
                    for lang, table in HeadRules.TABLES.items()
                ),
            )
            Settings.loaded = True
