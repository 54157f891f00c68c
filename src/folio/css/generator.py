"""Generate a pruned utility stylesheet from a set of class names.

Only classes that were actually found in the markup produce rules, so the
output is already "purged". Class names may carry variants separated by
``:`` (``md:hover:text-blue-600``); at most one responsive breakpoint and
any number of state variants are allowed. A leading ``!`` marks the
declarations ``!important``.

Output order: unconditioned rules first (in class-name order), then one
``@media (min-width: ...)`` block per breakpoint, smallest first.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from folio.css.catalog import (
    BORDER_RADIUS,
    BORDER_SIDES,
    BORDER_WIDTHS,
    BREAKPOINTS,
    COLOR_PALETTE,
    DEFAULT_FONT_FAMILIES,
    FONT_SIZES,
    FONT_WEIGHTS,
    FRACTIONS,
    LEADING,
    MAX_WIDTHS,
    SHADOWS,
    SIZE_KEYWORDS,
    SPACING_PROPERTIES,
    SPACING_SCALE,
    STATE_VARIANTS,
    STATIC_UTILITIES,
    TRACKING,
)

_ARBITRARY_RE = re.compile(r"^(?P<prefix>[a-z][a-z-]*)-\[(?P<value>[^\]]+)\]$")
_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_GENERIC_FAMILIES = frozenset(
    {"serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui"}
)
_CHILD_SPACING_SELECTOR = " > :not([hidden]) ~ :not([hidden])"
_NEGATABLE = frozenset({"m", "mx", "my", "mt", "mr", "mb", "ml", "top", "right", "bottom", "left", "inset"})
_SPACING_PREFIXES = sorted(SPACING_PROPERTIES, key=len, reverse=True)


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Theme:
    """Site-specific extensions to the default design tokens."""

    font_family: dict[str, list[str]] = field(default_factory=dict)
    colors: dict[str, str | dict[str, str]] = field(default_factory=dict)

    def font_families(self) -> dict[str, list[str]]:
        return {**DEFAULT_FONT_FAMILIES, **self.font_family}

    def palette(self) -> dict[str, dict[str, str] | str]:
        merged: dict[str, dict[str, str] | str] = dict(COLOR_PALETTE)
        for name, value in self.colors.items():
            existing = merged.get(name)
            if isinstance(value, dict) and isinstance(existing, dict):
                merged[name] = {**existing, **value}
            else:
                merged[name] = value
        return merged


@dataclass(frozen=True)
class Rule:
    """One rule produced by a utility, relative to the class selector."""

    declarations: tuple[str, ...]
    selector_suffix: str = ""


@dataclass(frozen=True)
class Stylesheet:
    """Result of :func:`generate_stylesheet`."""

    css: str
    rule_count: int
    classes: list[str]
    unknown: list[str]


# ---------------------------------------------------------------------------
# Class-name helpers
# ---------------------------------------------------------------------------


def split_variants(name: str) -> tuple[list[str], str]:
    """Split ``md:hover:p-4`` into ``(["md", "hover"], "p-4")``.

    Colons inside arbitrary values (``bg-[url(http://x)]``) are not
    treated as separators.
    """
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in name:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(0, depth - 1)
        if ch == ":" and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts[:-1], parts[-1]


def escape_class(name: str) -> str:
    """Escape a class name for use in a CSS selector.

    Examples:
        >>> escape_class("md:w-1/2")
        'md\\\\:w-1\\\\/2'
        >>> escape_class("2xl:p-4")
        '\\\\32 xl\\\\:p-4'
    """
    out: list[str] = []
    for i, ch in enumerate(name):
        if ch.isascii() and (ch.isalnum() or ch in "-_"):
            if i == 0 and ch.isdigit():
                out.append(f"\\{ord(ch):x} ")
            else:
                out.append(ch)
        else:
            out.append("\\" + ch)
    return "".join(out)


def _with_alpha(hex_value: str, alpha: float) -> str:
    digits = hex_value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgb({r} {g} {b} / {alpha:g})"


def _arbitrary(value: str) -> str:
    return value.replace("_", " ")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class _Resolver:
    """Maps a variant-free utility name to its rules for one theme."""

    def __init__(self, theme: Theme) -> None:
        self._palette = theme.palette()
        self._families = theme.font_families()
        self._handlers: list[Callable[[str], tuple[Rule, ...] | None]] = [
            self._static,
            self._arbitrary_value,
            self._spacing,
            self._space_between,
            self._sizing,
            self._text,
            self._font,
            self._background,
            self._border,
            self._rounded,
            self._shadow,
            self._typography_scale,
            self._misc_numeric,
            self._grid,
        ]

    def resolve(self, base: str) -> tuple[Rule, ...] | None:
        for handler in self._handlers:
            rules = handler(base)
            if rules:
                return rules
        return None

    # -- colour -------------------------------------------------------------

    def color(self, token: str) -> str | None:
        color_part, _, alpha_part = token.partition("/")
        alpha: float | None = None
        if alpha_part:
            if not alpha_part.isdigit():
                return None
            alpha = int(alpha_part) / 100

        value: str | None = None
        entry = self._palette.get(color_part)
        if isinstance(entry, str):
            value = entry
        elif isinstance(entry, dict):
            value = entry.get("DEFAULT")
        else:
            name, _, shade = color_part.rpartition("-")
            family = self._palette.get(name) if name else None
            if isinstance(family, dict):
                value = family.get(shade)

        if value is None:
            return None
        if alpha is not None and _HEX_RE.match(value):
            return _with_alpha(value, alpha)
        return value

    # -- handlers -----------------------------------------------------------

    def _static(self, base: str) -> tuple[Rule, ...] | None:
        decls = STATIC_UTILITIES.get(base)
        return (Rule(decls),) if decls else None

    def _arbitrary_value(self, base: str) -> tuple[Rule, ...] | None:
        match = _ARBITRARY_RE.match(base)
        if match is None:
            return None
        prefix, value = match["prefix"], _arbitrary(match["value"])
        looks_like_color = value.startswith(("#", "rgb", "hsl", "var("))
        simple: dict[str, tuple[str, ...]] = {
            "w": ("width",),
            "h": ("height",),
            "min-w": ("min-width",),
            "min-h": ("min-height",),
            "max-w": ("max-width",),
            "max-h": ("max-height",),
            "leading": ("line-height",),
            "tracking": ("letter-spacing",),
            "rounded": ("border-radius",),
            "shadow": ("box-shadow",),
            "grid-cols": ("grid-template-columns",),
            "z": ("z-index",),
            "opacity": ("opacity",),
            "font": ("font-family",),
            **SPACING_PROPERTIES,
        }
        if prefix in simple:
            return (Rule(tuple(f"{prop}: {value}" for prop in simple[prefix])),)
        if prefix == "text":
            prop = "color" if looks_like_color else "font-size"
            return (Rule((f"{prop}: {value}",)),)
        if prefix == "bg":
            prop = "background-color" if looks_like_color else "background-image"
            return (Rule((f"{prop}: {value}",)),)
        if prefix == "border":
            prop = "border-color" if looks_like_color else "border-width"
            return (Rule((f"{prop}: {value}",)),)
        return None

    def _spacing(self, base: str) -> tuple[Rule, ...] | None:
        negative = base.startswith("-")
        name = base[1:] if negative else base
        for prefix in _SPACING_PREFIXES:
            if not name.startswith(prefix + "-"):
                continue
            token = name[len(prefix) + 1 :]
            if token == "auto" and prefix in _NEGATABLE and not negative:
                value = "auto"
            elif token in FRACTIONS and prefix in {"top", "right", "bottom", "left", "inset"}:
                value = FRACTIONS[token]
            else:
                value = SPACING_SCALE.get(token, "")
            if not value:
                return None
            if negative:
                if prefix not in _NEGATABLE:
                    return None
                value = f"-{value}"
            return (Rule(tuple(f"{prop}: {value}" for prop in SPACING_PROPERTIES[prefix])),)
        return None

    def _space_between(self, base: str) -> tuple[Rule, ...] | None:
        for axis, prop in (("x", "margin-left"), ("y", "margin-top")):
            prefix = f"space-{axis}-"
            if base.startswith(prefix):
                value = SPACING_SCALE.get(base[len(prefix) :])
                if value is None:
                    return None
                return (Rule((f"{prop}: {value}",), _CHILD_SPACING_SELECTOR),)
        return None

    def _sizing(self, base: str) -> tuple[Rule, ...] | None:
        if base.startswith("max-w-"):
            value = MAX_WIDTHS.get(base[6:])
            return (Rule((f"max-width: {value}",)),) if value else None

        sizes = (
            ("min-w-", "min-width", "100vw"),
            ("min-h-", "min-height", "100vh"),
            ("max-h-", "max-height", "100vh"),
            ("w-", "width", "100vw"),
            ("h-", "height", "100vh"),
        )
        for prefix, prop, screen in sizes:
            if not base.startswith(prefix):
                continue
            token = base[len(prefix) :]
            if token == "screen":
                value: str | None = screen
            else:
                value = (
                    SPACING_SCALE.get(token) or FRACTIONS.get(token) or SIZE_KEYWORDS.get(token)
                )
            return (Rule((f"{prop}: {value}",)),) if value else None
        return None

    def _text(self, base: str) -> tuple[Rule, ...] | None:
        if not base.startswith("text-"):
            return None
        token = base[5:]
        if token in FONT_SIZES:
            size, line_height = FONT_SIZES[token]
            return (Rule((f"font-size: {size}", f"line-height: {line_height}")),)
        color = self.color(token)
        return (Rule((f"color: {color}",)),) if color else None

    def _font(self, base: str) -> tuple[Rule, ...] | None:
        if not base.startswith("font-"):
            return None
        token = base[5:]
        if token in FONT_WEIGHTS:
            return (Rule((f"font-weight: {FONT_WEIGHTS[token]}",)),)
        family = self._families.get(token)
        if family is None:
            return None
        stack = ", ".join(
            name if name in _GENERIC_FAMILIES or " " not in name else f'"{name}"'
            for name in family
        )
        return (Rule((f"font-family: {stack}",)),)

    def _background(self, base: str) -> tuple[Rule, ...] | None:
        if not base.startswith("bg-"):
            return None
        token = base[3:]
        keywords = {
            "cover": "background-size: cover",
            "contain": "background-size: contain",
            "center": "background-position: center",
            "no-repeat": "background-repeat: no-repeat",
        }
        if token in keywords:
            return (Rule((keywords[token],)),)
        color = self.color(token)
        return (Rule((f"background-color: {color}",)),) if color else None

    def _border(self, base: str) -> tuple[Rule, ...] | None:
        if base != "border" and not base.startswith("border-"):
            return None
        rest = base[7:] if base.startswith("border-") else ""
        side, _, width_token = rest.partition("-")
        if side not in BORDER_SIDES or side == "":
            side, width_token = "", rest
        width = BORDER_WIDTHS.get(width_token)
        if width is not None:
            decls = tuple(f"{prop}: {width}" for prop in BORDER_SIDES[side])
            return (Rule((*decls, "border-style: solid")),)
        color = self.color(rest)
        return (Rule((f"border-color: {color}",)),) if color else None

    def _rounded(self, base: str) -> tuple[Rule, ...] | None:
        if base != "rounded" and not base.startswith("rounded-"):
            return None
        rest = base[8:] if base.startswith("rounded-") else ""
        corners = {
            "t": ("border-top-left-radius", "border-top-right-radius"),
            "r": ("border-top-right-radius", "border-bottom-right-radius"),
            "b": ("border-bottom-left-radius", "border-bottom-right-radius"),
            "l": ("border-top-left-radius", "border-bottom-left-radius"),
        }
        side, _, size = rest.partition("-")
        if side in corners:
            value = BORDER_RADIUS.get(size)
            if value is None:
                return None
            return (Rule(tuple(f"{prop}: {value}" for prop in corners[side])),)
        value = BORDER_RADIUS.get(rest)
        return (Rule((f"border-radius: {value}",)),) if value else None

    def _shadow(self, base: str) -> tuple[Rule, ...] | None:
        if base != "shadow" and not base.startswith("shadow-"):
            return None
        value = SHADOWS.get(base[7:] if base.startswith("shadow-") else "")
        return (Rule((f"box-shadow: {value}",)),) if value else None

    def _typography_scale(self, base: str) -> tuple[Rule, ...] | None:
        if base.startswith("leading-"):
            token = base[8:]
            value = LEADING.get(token) or SPACING_SCALE.get(token)
            return (Rule((f"line-height: {value}",)),) if value else None
        if base.startswith("tracking-"):
            value = TRACKING.get(base[9:])
            return (Rule((f"letter-spacing: {value}",)),) if value else None
        return None

    def _misc_numeric(self, base: str) -> tuple[Rule, ...] | None:
        if base.startswith("opacity-"):
            token = base[8:]
            if token.isdigit() and int(token) <= 100:
                return (Rule((f"opacity: {int(token) / 100:g}",)),)
            return None
        if base.startswith("z-"):
            token = base[2:]
            if token == "auto" or token.isdigit():
                return (Rule((f"z-index: {token}",)),)
        return None

    def _grid(self, base: str) -> tuple[Rule, ...] | None:
        if base.startswith("grid-cols-"):
            token = base[10:]
            if token.isdigit() and 1 <= int(token) <= 12:
                return (Rule((f"grid-template-columns: repeat({token}, minmax(0, 1fr))",)),)
            return None
        if base.startswith("col-span-"):
            token = base[9:]
            if token == "full":
                return (Rule(("grid-column: 1 / -1",)),)
            if token.isdigit() and 1 <= int(token) <= 12:
                return (Rule((f"grid-column: span {token} / span {token}",)),)
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _format_rule(selector: str, declarations: Iterable[str], indent: str = "") -> str:
    body = "".join(f"{indent}  {decl};\n" for decl in declarations)
    return f"{indent}{selector} {{\n{body}{indent}}}\n"


def generate_stylesheet(classes: Iterable[str], theme: Theme | None = None) -> Stylesheet:
    """Build CSS for exactly the utilities named in *classes*.

    Unrecognized names (custom component classes, typos) are returned in
    :attr:`Stylesheet.unknown` and produce no output.
    """
    resolver = _Resolver(theme or Theme())
    unconditioned: list[str] = []
    responsive: dict[str, list[str]] = {bp: [] for bp in BREAKPOINTS}
    recognized: list[str] = []
    unknown: list[str] = []
    rule_count = 0

    for name in sorted(set(classes)):
        variants, base = split_variants(name)
        important = base.startswith("!")
        if important:
            base = base[1:]

        breakpoints = [v for v in variants if v in BREAKPOINTS]
        states = [v for v in variants if v in STATE_VARIANTS]
        if len(breakpoints) > 1 or len(breakpoints) + len(states) != len(variants):
            unknown.append(name)
            continue

        rules = resolver.resolve(base)
        if rules is None:
            unknown.append(name)
            continue

        recognized.append(name)
        pseudo = "".join(STATE_VARIANTS[s] for s in states)
        target = responsive[breakpoints[0]] if breakpoints else unconditioned
        indent = "  " if breakpoints else ""
        for rule in rules:
            decls = rule.declarations
            if important:
                decls = tuple(f"{d} !important" for d in decls)
            selector = f".{escape_class(name)}{pseudo}{rule.selector_suffix}"
            target.append(_format_rule(selector, decls, indent))
            rule_count += 1

    chunks: list[str] = list(unconditioned)
    for bp, min_width in BREAKPOINTS.items():
        if responsive[bp]:
            chunks.append(f"@media (min-width: {min_width}) {{\n{''.join(responsive[bp])}}}\n")

    return Stylesheet(
        css="".join(chunks),
        rule_count=rule_count,
        classes=recognized,
        unknown=unknown,
    )
