from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from .theme import ColorScheme


# section -> key -> color variable from the pywal palette
COLOR_RULES: dict[str, dict[str, str]] = {
    "global": {
        "separator_color": "color1",
        "frame_color": "color1",
        "frame_color_low": "color1",
        "frame_color_normal": "color4",
        "frame_color_critical": "color5",
    },
    "urgency_low": {
        "background": "background",
        "foreground": "foreground",
        "frame_color": "color1",
    },
    "urgency_normal": {
        "background": "background",
        "foreground": "foreground",
        "frame_color": "color1",
    },
    "urgency_critical": {
        "background": "color1",
        "foreground": "foreground",
        "frame_color": "color5",
    },
}

_SECTION_RE = re.compile(r"^\s*\[([^\]]*)\]\s*$")
_KEY_RE = re.compile(r"^\s*([A-Za-z0-9_.-]+)\s*=")


@dataclass
class _Line:
    text: str
    section: str | None
    key: str | None = None


@dataclass
class DunstConfig:
    """Line-preserving view of a dunstrc.

    Every line is kept verbatim; only lines passed through set() are
    rewritten, so serialize() returns the original text for the rest.
    """

    lines: list[_Line] = field(default_factory=list)

    def sections(self) -> list[str]:
        seen: list[str] = []
        for line in self.lines:
            if line.section is not None and line.section not in seen:
                seen.append(line.section)
        return seen

    def get(self, section: str, key: str) -> str | None:
        for line in self.lines:
            if line.section == section and line.key == key:
                value = line.text.split("=", 1)[1].strip()
                if len(value) >= 2 and value[0] == value[-1] == '"':
                    value = value[1:-1]
                return value
        return None

    def set(self, section: str, key: str, value: str) -> bool:
        """Rewrite existing ``key`` lines inside ``section``. Returns True if any changed."""

        changed = False
        for line in self.lines:
            if line.section != section or line.key != key:
                continue
            body = line.text.rstrip("\r\n")
            ending = line.text[len(body):]
            indent = body[: len(body) - len(body.lstrip())]
            new_text = f'{indent}{key} = "{value}"{ending}'
            if new_text != line.text:
                line.text = new_text
                changed = True
        return changed

    def serialize(self) -> str:
        return "".join(line.text for line in self.lines)


def parse(text: str) -> DunstConfig:
    cfg = DunstConfig()
    section: str | None = None
    for raw in text.splitlines(keepends=True):
        stripped = raw.strip()
        m = _SECTION_RE.match(raw)
        if m:
            section = m.group(1).strip()
            cfg.lines.append(_Line(raw, section))
            continue
        if not stripped or stripped[0] in "#;":
            cfg.lines.append(_Line(raw, section))
            continue
        km = _KEY_RE.match(raw)
        cfg.lines.append(_Line(raw, section, km.group(1) if km else None))
    return cfg


def apply_color_rules(cfg: DunstConfig, scheme: ColorScheme) -> int:
    """Apply COLOR_RULES to cfg; returns the number of keys rewritten."""

    variables = scheme.variables()
    count = 0
    for section, rules in COLOR_RULES.items():
        for key, variable in rules.items():
            value = variables.get(variable)
            if value is None:
                continue
            if cfg.set(section, key, value):
                count += 1
    return count


def inject_colors(path: Path, scheme: ColorScheme) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.touch()

    # newline="" keeps CRLF endings intact through the round trip.
    with path.open(encoding="utf-8", newline="") as f:
        original = f.read()

    cfg = parse(original)
    count = apply_color_rules(cfg, scheme)
    updated = cfg.serialize()
    if updated != original:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(updated)
    return count
