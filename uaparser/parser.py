"""User-agent parsing driven by a regexes.yaml rule set."""

from __future__ import annotations

import enum
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Generic, TypeVar

import yaml

from .expander import expand_alternatives
from .pattern import Match, Pattern, ReplaceTemplate
from .regextext import trim
from .snippets import SnippetIndex, SnippetMapping


@dataclass
class Device:
    """The device a user-agent string belongs to."""

    family: str = "Other"
    model: str = ""
    brand: str = ""


@dataclass
class Agent:
    """A browser or operating system with its version parts."""

    family: str = "Other"
    major: str = ""
    minor: str = ""
    patch: str = ""
    patch_minor: str = ""

    def version_string(self) -> str:
        """``major.minor.patch`` with missing parts shown as ``0``."""
        return ".".join(part or "0" for part in (self.major, self.minor, self.patch))

    def __str__(self) -> str:
        return f"{self.family} {self.version_string()}"


@dataclass
class UserAgent:
    """Everything a parser found in one user-agent string."""

    device: Device = field(default_factory=Device)
    os: Agent = field(default_factory=Agent)
    browser: Agent = field(default_factory=Agent)

    def full_string(self) -> str:
        """``browser/os``, each as family and version."""
        return f"{self.browser}/{self.os}"

    def is_spider(self) -> bool:
        """Whether the device was recognised as a crawler."""
        return self.device.family == "Spider"


class DeviceType(enum.Enum):
    """Coarse device class guessed from a user-agent string."""

    UNKNOWN = 0
    DESKTOP = 1
    MOBILE = 2
    TABLET = 3


@dataclass(eq=False)
class _Rule:
    index: int
    pattern: Pattern | None = None
    replacement: ReplaceTemplate | None = None

    def match(self, text: str) -> Match | None:
        return None if self.pattern is None else self.pattern.match(text)


@dataclass(eq=False)
class _DeviceRule(_Rule):
    brand_replacement: ReplaceTemplate | None = None
    model_replacement: ReplaceTemplate | None = None


@dataclass(eq=False)
class _AgentRule(_Rule):
    major_replacement: ReplaceTemplate | None = None
    minor_replacement: ReplaceTemplate | None = None
    patch_replacement: ReplaceTemplate | None = None


@dataclass(frozen=True)
class _AgentKeys:
    family: str
    major: str
    minor: str
    patch: str


_BROWSER_KEYS = _AgentKeys(
    "family_replacement", "v1_replacement", "v2_replacement", "v3_replacement"
)
_OS_KEYS = _AgentKeys(
    "os_replacement", "os_v1_replacement", "os_v2_replacement", "os_v3_replacement"
)

R = TypeVar("R", bound=_Rule)


class _RuleSet(Generic[R]):
    """Rules of one kind, with a snippet index to pick the candidates quickly."""

    def __init__(self) -> None:
        self.rules: list[R] = []
        self._index = SnippetIndex()
        self._mapping: SnippetMapping[R] = SnippetMapping()

    @property
    def next_index(self) -> int:
        return len(self.rules) + 1

    def register(self, rule: R, regex: str) -> None:
        for expression in expand_alternatives(regex):
            self._mapping.add_mapping(self._index.register_snippets(expression), rule)

    def first_match(self, text: str) -> tuple[R, Match] | None:
        candidates = self._mapping.expressions(self._index.snippets_in(text))
        for rule in sorted(candidates, key=attrgetter("index")):
            found = rule.match(text)
            if found is not None:
                return rule, found
        return None


def _compile(regex: str, case_sensitive: bool = True) -> Pattern | None:
    """Compile ``regex``; an expression that does not compile never matches."""
    try:
        return Pattern(regex, case_sensitive)
    except re.error:
        return None


def _expand_or_group(template: ReplaceTemplate | None, found: Match, group: int) -> str:
    if template is None:
        return found.get(group) if len(found) > group else ""
    return template.expand(found)


def _string_pairs(node: Any, section: str) -> Iterator[tuple[str, str]]:
    if not isinstance(node, dict):
        raise ValueError(f"every entry of {section} must be a mapping")
    for key, value in node.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValueError(f"entries of {section} must map strings to strings")
        yield key, value


def _load_document(source: str | os.PathLike[str]) -> dict[str, Any]:
    if isinstance(source, os.PathLike) or (len(source) > 4 and source.endswith(".yml")):
        with open(source, encoding="utf-8") as handle:
            text = handle.read()
    else:
        text = source
    document = yaml.load(text, Loader=yaml.BaseLoader)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError("the rule set must be a mapping")
    return document


def _section(document: dict[str, Any], name: str) -> list[Any]:
    entries = document.get(name) or []
    if not isinstance(entries, list):
        raise ValueError(f"{name} must be a list")
    return entries


_MOBILE = Pattern(
    "Mobile|iP(hone|od|ad)|Android|BlackBerry|IEMobile|Kindle|NetFront|Silk-"
    "Accelerated|(hpw|web)OS|Fennec|Minimo|Opera "
    "M(obi|ini)|Blazer|Dolfin|Dolphin|Skyfire|Zune"
)
_TABLET = Pattern("(tablet|ipad|playbook|silk)|(android.*)", case_sensitive=False)


class UserAgentParser:
    """Parses user-agent strings with the rules of a regexes.yaml document.

    ``regexes`` is a path when it is a path object or a string ending in
    ``.yml``; any other string is taken as the YAML text itself.
    """

    def __init__(self, regexes: str | os.PathLike[str]) -> None:
        self._browsers: _RuleSet[_AgentRule] = _RuleSet()
        self._oses: _RuleSet[_AgentRule] = _RuleSet()
        self._devices: _RuleSet[_DeviceRule] = _RuleSet()

        document = _load_document(regexes)
        for node in _section(document, "user_agent_parsers"):
            self._add_agent_rule(node, _BROWSER_KEYS, self._browsers, "user_agent_parsers")
        for node in _section(document, "os_parsers"):
            self._add_agent_rule(node, _OS_KEYS, self._oses, "os_parsers")
        for node in _section(document, "device_parsers"):
            self._add_device_rule(node)

    @staticmethod
    def _add_agent_rule(
        node: Any, keys: _AgentKeys, rules: _RuleSet[_AgentRule], section: str
    ) -> None:
        rule = _AgentRule(index=rules.next_index)
        rules.rules.append(rule)
        for key, value in _string_pairs(node, section):
            if key == "regex":
                rule.pattern = _compile(value)
                rules.register(rule, value)
            elif key == keys.family:
                rule.replacement = ReplaceTemplate(value)
            elif key == keys.major and value:
                if value != "$2":
                    rule.major_replacement = ReplaceTemplate(value)
            elif key == keys.minor and value:
                if value != "$3":
                    rule.minor_replacement = ReplaceTemplate(value)
            elif key == keys.patch and value:
                if value != "$4":
                    rule.patch_replacement = ReplaceTemplate(value)

    def _add_device_rule(self, node: Any) -> None:
        rule = _DeviceRule(index=self._devices.next_index)
        self._devices.rules.append(rule)
        regex = ""
        case_insensitive = False
        for key, value in _string_pairs(node, "device_parsers"):
            if key == "regex":
                regex = value
            elif key == "regex_flag" and value == "i":
                case_insensitive = True
            elif key == "device_replacement":
                rule.replacement = ReplaceTemplate(value)
            elif key == "model_replacement":
                rule.model_replacement = ReplaceTemplate(value)
            elif key == "brand_replacement":
                rule.brand_replacement = ReplaceTemplate(value)
        rule.pattern = _compile(regex, not case_insensitive)
        self._devices.register(rule, regex)

    def parse(self, ua: str) -> UserAgent:
        """Device, operating system and browser of ``ua``."""
        return UserAgent(
            device=self.parse_device(ua), os=self.parse_os(ua), browser=self.parse_browser(ua)
        )

    def parse_device(self, ua: str) -> Device:
        """The device of ``ua``; family ``Other`` when no rule matches."""
        found = self._devices.first_match(ua)
        if found is None:
            return Device()
        rule, groups = found
        brand = ""
        if rule.brand_replacement is not None:
            brand = trim(rule.brand_replacement.expand(groups))
        return Device(
            family=trim(_expand_or_group(rule.replacement, groups, 1)),
            model=trim(_expand_or_group(rule.model_replacement, groups, 1)),
            brand=brand,
        )

    def parse_os(self, ua: str) -> Agent:
        """The operating system of ``ua``; family ``Other`` when no rule matches."""
        return self._parse_agent(self._oses, ua)

    def parse_browser(self, ua: str) -> Agent:
        """The browser of ``ua``; family ``Other`` when no rule matches."""
        return self._parse_agent(self._browsers, ua)

    @staticmethod
    def _parse_agent(rules: _RuleSet[_AgentRule], ua: str) -> Agent:
        found = rules.first_match(ua)
        if found is None:
            return Agent()
        rule, groups = found
        patch_minor = ""
        if len(groups) == 6 and not groups.get(5).startswith("."):
            patch_minor = groups.get(5)
        return Agent(
            family=trim(_expand_or_group(rule.replacement, groups, 1)),
            major=_expand_or_group(rule.major_replacement, groups, 2),
            minor=_expand_or_group(rule.minor_replacement, groups, 3),
            patch=_expand_or_group(rule.patch_replacement, groups, 4),
            patch_minor=patch_minor,
        )

    @staticmethod
    def device_type(ua: str) -> DeviceType:
        """Guess whether ``ua`` comes from a tablet, a mobile or a desktop device."""
        tablet = _TABLET.match(ua)
        if tablet is not None and "Mobile" not in tablet.get(2):
            return DeviceType.TABLET
        if _MOBILE.match(ua) is not None:
            return DeviceType.MOBILE
        return DeviceType.DESKTOP