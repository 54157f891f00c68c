"""Design tokens and fixed utilities understood by the generator.

Scales follow the usual utility-first defaults (``4`` = ``1rem``).
Colours are a trimmed palette; sites extend it via ``[css.theme] colors``.
"""

from __future__ import annotations

BREAKPOINTS: dict[str, str] = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}

STATE_VARIANTS: dict[str, str] = {
    "hover": ":hover",
    "focus": ":focus",
    "focus-visible": ":focus-visible",
    "active": ":active",
    "disabled": ":disabled",
    "first": ":first-child",
    "last": ":last-child",
}

SPACING_SCALE: dict[str, str] = {
    "0": "0px",
    "px": "1px",
    "0.5": "0.125rem",
    "1": "0.25rem",
    "1.5": "0.375rem",
    "2": "0.5rem",
    "2.5": "0.625rem",
    "3": "0.75rem",
    "3.5": "0.875rem",
    "4": "1rem",
    "5": "1.25rem",
    "6": "1.5rem",
    "7": "1.75rem",
    "8": "2rem",
    "9": "2.25rem",
    "10": "2.5rem",
    "11": "2.75rem",
    "12": "3rem",
    "14": "3.5rem",
    "16": "4rem",
    "20": "5rem",
    "24": "6rem",
    "28": "7rem",
    "32": "8rem",
    "36": "9rem",
    "40": "10rem",
    "48": "12rem",
    "56": "14rem",
    "64": "16rem",
    "72": "18rem",
    "80": "20rem",
    "96": "24rem",
}

SPACING_PROPERTIES: dict[str, tuple[str, ...]] = {
    "p": ("padding",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
    "m": ("margin",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
    "gap": ("gap",),
    "gap-x": ("column-gap",),
    "gap-y": ("row-gap",),
    "top": ("top",),
    "right": ("right",),
    "bottom": ("bottom",),
    "left": ("left",),
    "inset": ("inset",),
}

FRACTIONS: dict[str, str] = {
    "1/2": "50%",
    "1/3": "33.333333%",
    "2/3": "66.666667%",
    "1/4": "25%",
    "3/4": "75%",
    "1/5": "20%",
    "2/5": "40%",
    "3/5": "60%",
    "4/5": "80%",
}

SIZE_KEYWORDS: dict[str, str] = {
    "auto": "auto",
    "full": "100%",
    "min": "min-content",
    "max": "max-content",
    "fit": "fit-content",
}

MAX_WIDTHS: dict[str, str] = {
    "none": "none",
    "xs": "20rem",
    "sm": "24rem",
    "md": "28rem",
    "lg": "32rem",
    "xl": "36rem",
    "2xl": "42rem",
    "3xl": "48rem",
    "4xl": "56rem",
    "5xl": "64rem",
    "6xl": "72rem",
    "7xl": "80rem",
    "full": "100%",
    "prose": "65ch",
    "screen-sm": "640px",
    "screen-md": "768px",
    "screen-lg": "1024px",
    "screen-xl": "1280px",
}

FONT_SIZES: dict[str, tuple[str, str]] = {
    "xs": ("0.75rem", "1rem"),
    "sm": ("0.875rem", "1.25rem"),
    "base": ("1rem", "1.5rem"),
    "lg": ("1.125rem", "1.75rem"),
    "xl": ("1.25rem", "1.75rem"),
    "2xl": ("1.5rem", "2rem"),
    "3xl": ("1.875rem", "2.25rem"),
    "4xl": ("2.25rem", "2.5rem"),
    "5xl": ("3rem", "1"),
    "6xl": ("3.75rem", "1"),
    "7xl": ("4.5rem", "1"),
    "8xl": ("6rem", "1"),
    "9xl": ("8rem", "1"),
}

FONT_WEIGHTS: dict[str, str] = {
    "thin": "100",
    "extralight": "200",
    "light": "300",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
    "extrabold": "800",
    "black": "900",
}

DEFAULT_FONT_FAMILIES: dict[str, list[str]] = {
    "sans": ["ui-sans-serif", "system-ui", "sans-serif"],
    "serif": ["ui-serif", "Georgia", "serif"],
    "mono": ["ui-monospace", "SFMono-Regular", "monospace"],
}

LEADING: dict[str, str] = {
    "none": "1",
    "tight": "1.25",
    "snug": "1.375",
    "normal": "1.5",
    "relaxed": "1.625",
    "loose": "2",
}

TRACKING: dict[str, str] = {
    "tighter": "-0.05em",
    "tight": "-0.025em",
    "normal": "0em",
    "wide": "0.025em",
    "wider": "0.05em",
    "widest": "0.1em",
}

BORDER_RADIUS: dict[str, str] = {
    "none": "0px",
    "sm": "0.125rem",
    "": "0.25rem",
    "md": "0.375rem",
    "lg": "0.5rem",
    "xl": "0.75rem",
    "2xl": "1rem",
    "3xl": "1.5rem",
    "full": "9999px",
}

BORDER_WIDTHS: dict[str, str] = {
    "": "1px",
    "0": "0px",
    "2": "2px",
    "4": "4px",
    "8": "8px",
}

BORDER_SIDES: dict[str, tuple[str, ...]] = {
    "": ("border-width",),
    "t": ("border-top-width",),
    "r": ("border-right-width",),
    "b": ("border-bottom-width",),
    "l": ("border-left-width",),
    "x": ("border-left-width", "border-right-width"),
    "y": ("border-top-width", "border-bottom-width"),
}

SHADOWS: dict[str, str] = {
    "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
    "": "0 1px 3px 0 rgb(0 0 0 / 0.1), 0 1px 2px -1px rgb(0 0 0 / 0.1)",
    "md": "0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1)",
    "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1), 0 4px 6px -4px rgb(0 0 0 / 0.1)",
    "xl": "0 20px 25px -5px rgb(0 0 0 / 0.1), 0 8px 10px -6px rgb(0 0 0 / 0.1)",
    "2xl": "0 25px 50px -12px rgb(0 0 0 / 0.25)",
    "inner": "inset 0 2px 4px 0 rgb(0 0 0 / 0.05)",
    "none": "0 0 #0000",
}

COLOR_PALETTE: dict[str, dict[str, str] | str] = {
    "black": "#000000",
    "white": "#ffffff",
    "transparent": "transparent",
    "current": "currentColor",
    "inherit": "inherit",
    "slate": {
        "50": "#f8fafc",
        "100": "#f1f5f9",
        "200": "#e2e8f0",
        "300": "#cbd5e1",
        "400": "#94a3b8",
        "500": "#64748b",
        "600": "#475569",
        "700": "#334155",
        "800": "#1e293b",
        "900": "#0f172a",
        "950": "#020617",
    },
    "gray": {
        "50": "#f9fafb",
        "100": "#f3f4f6",
        "200": "#e5e7eb",
        "300": "#d1d5db",
        "400": "#9ca3af",
        "500": "#6b7280",
        "600": "#4b5563",
        "700": "#374151",
        "800": "#1f2937",
        "900": "#111827",
        "950": "#030712",
    },
    "zinc": {
        "100": "#f4f4f5",
        "200": "#e4e4e7",
        "400": "#a1a1aa",
        "500": "#71717a",
        "700": "#3f3f46",
        "800": "#27272a",
        "900": "#18181b",
        "950": "#09090b",
    },
    "red": {
        "100": "#fee2e2",
        "400": "#f87171",
        "500": "#ef4444",
        "600": "#dc2626",
        "700": "#b91c1c",
    },
    "amber": {
        "100": "#fef3c7",
        "300": "#fcd34d",
        "400": "#fbbf24",
        "500": "#f59e0b",
        "600": "#d97706",
    },
    "emerald": {
        "100": "#d1fae5",
        "300": "#6ee7b7",
        "400": "#34d399",
        "500": "#10b981",
        "600": "#059669",
        "700": "#047857",
    },
    "sky": {
        "100": "#e0f2fe",
        "300": "#7dd3fc",
        "400": "#38bdf8",
        "500": "#0ea5e9",
        "600": "#0284c7",
    },
    "blue": {
        "50": "#eff6ff",
        "100": "#dbeafe",
        "400": "#60a5fa",
        "500": "#3b82f6",
        "600": "#2563eb",
        "700": "#1d4ed8",
        "900": "#1e3a8a",
    },
    "indigo": {
        "100": "#e0e7ff",
        "400": "#818cf8",
        "500": "#6366f1",
        "600": "#4f46e5",
        "700": "#4338ca",
    },
    "violet": {
        "400": "#a78bfa",
        "500": "#8b5cf6",
        "600": "#7c3aed",
    },
    "pink": {
        "400": "#f472b6",
        "500": "#ec4899",
        "600": "#db2777",
    },
}

# Utilities whose declarations never vary.
STATIC_UTILITIES: dict[str, tuple[str, ...]] = {
    "block": ("display: block",),
    "inline-block": ("display: inline-block",),
    "inline": ("display: inline",),
    "flex": ("display: flex",),
    "inline-flex": ("display: inline-flex",),
    "grid": ("display: grid",),
    "hidden": ("display: none",),
    "contents": ("display: contents",),
    "static": ("position: static",),
    "relative": ("position: relative",),
    "absolute": ("position: absolute",),
    "fixed": ("position: fixed",),
    "sticky": ("position: sticky",),
    "flex-row": ("flex-direction: row",),
    "flex-col": ("flex-direction: column",),
    "flex-wrap": ("flex-wrap: wrap",),
    "flex-nowrap": ("flex-wrap: nowrap",),
    "flex-1": ("flex: 1 1 0%",),
    "flex-auto": ("flex: 1 1 auto",),
    "flex-none": ("flex: none",),
    "grow": ("flex-grow: 1",),
    "shrink-0": ("flex-shrink: 0",),
    "items-start": ("align-items: flex-start",),
    "items-center": ("align-items: center",),
    "items-end": ("align-items: flex-end",),
    "items-baseline": ("align-items: baseline",),
    "items-stretch": ("align-items: stretch",),
    "justify-start": ("justify-content: flex-start",),
    "justify-center": ("justify-content: center",),
    "justify-end": ("justify-content: flex-end",),
    "justify-between": ("justify-content: space-between",),
    "justify-around": ("justify-content: space-around",),
    "self-center": ("align-self: center",),
    "place-items-center": ("place-items: center",),
    "text-left": ("text-align: left",),
    "text-center": ("text-align: center",),
    "text-right": ("text-align: right",),
    "text-justify": ("text-align: justify",),
    "italic": ("font-style: italic",),
    "not-italic": ("font-style: normal",),
    "uppercase": ("text-transform: uppercase",),
    "lowercase": ("text-transform: lowercase",),
    "capitalize": ("text-transform: capitalize",),
    "underline": ("text-decoration-line: underline",),
    "line-through": ("text-decoration-line: line-through",),
    "no-underline": ("text-decoration-line: none",),
    "antialiased": (
        "-webkit-font-smoothing: antialiased",
        "-moz-osx-font-smoothing: grayscale",
    ),
    "truncate": ("overflow: hidden", "text-overflow: ellipsis", "white-space: nowrap"),
    "whitespace-nowrap": ("white-space: nowrap",),
    "break-words": ("overflow-wrap: break-word",),
    "overflow-hidden": ("overflow: hidden",),
    "overflow-auto": ("overflow: auto",),
    "overflow-x-auto": ("overflow-x: auto",),
    "object-cover": ("object-fit: cover",),
    "object-contain": ("object-fit: contain",),
    "cursor-pointer": ("cursor: pointer",),
    "select-none": ("user-select: none",),
    "pointer-events-none": ("pointer-events: none",),
    "list-none": ("list-style-type: none",),
    "list-disc": ("list-style-type: disc",),
    "list-decimal": ("list-style-type: decimal",),
    "border-solid": ("border-style: solid",),
    "border-dashed": ("border-style: dashed",),
    "border-none": ("border-style: none",),
    "transition": (
        "transition-property: color, background-color, border-color, "
        "text-decoration-color, fill, stroke, opacity, box-shadow, transform",
        "transition-timing-function: cubic-bezier(0.4, 0, 0.2, 1)",
        "transition-duration: 150ms",
    ),
    "transition-colors": (
        "transition-property: color, background-color, border-color, "
        "text-decoration-color, fill, stroke",
        "transition-timing-function: cubic-bezier(0.4, 0, 0.2, 1)",
        "transition-duration: 150ms",
    ),
    "mx-auto": ("margin-left: auto", "margin-right: auto"),
    "container": ("width: 100%",),
    "sr-only": (
        "position: absolute",
        "width: 1px",
        "height: 1px",
        "padding: 0",
        "margin: -1px",
        "overflow: hidden",
        "clip: rect(0, 0, 0, 0)",
        "white-space: nowrap",
        "border-width: 0",
    ),
}
