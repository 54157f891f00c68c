"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, folio.toml only contains overrides.
A fresh site needs only [site] title and url.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- folio.toml sections ---


class SiteConfig(BaseModel):
    """[site] section, exposed to templates as ``site.*``."""

    model_config = {"frozen": True}

    title: str = "My Blog"
    url: str = "http://localhost:4000"
    baseurl: str = ""
    author: str = ""
    description: str = ""
    language: str = "en"


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    output_dir: str = "_site"
    posts_dir: str = "_posts"
    drafts_dir: str = "_drafts"
    layouts_dir: str = "_layouts"
    includes_dir: str = "_includes"
    plugins_dir: str = "_plugins"
    permalink: str = "/blog/{year}/{month}/{day}/{slug}/"
    post_layout: str = "post"
    page_layout: str = "default"
    drafts: bool = False
    future: bool = False
    clean: bool = True
    exclude: list[str] = Field(
        default_factory=lambda: [
            "README.md",
            "LICENSE*",
            "package.json",
            "package-lock.json",
            "tailwind.config.js",
            "node_modules/**",
            "vendor/**",
        ]
    )
    markdown_extensions: list[str] = Field(
        default_factory=lambda: ["fenced_code", "tables", "toc", "footnotes", "attr_list"]
    )


class CssThemeConfig(BaseModel):
    """[css.theme] section."""

    model_config = {"frozen": True}

    font_family: dict[str, list[str]] = Field(
        default_factory=lambda: {
            "sans": ["Inter", "sans-serif"],
            "display": ["Space Grotesk", "sans-serif"],
            "mono": ["IBM Plex Mono", "monospace"],
        }
    )
    colors: dict[str, str | dict[str, str]] = Field(default_factory=dict)


class CssConfig(BaseModel):
    """[css] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    content: list[str] = Field(
        default_factory=lambda: [
            "_layouts/**/*.html",
            "_includes/**/*.html",
            "_posts/**/*.md",
            "*.html",
        ]
    )
    input: str | None = "assets/css/base.css"
    output: str = "assets/css/site.css"
    minify: bool = False
    theme: CssThemeConfig = Field(default_factory=CssThemeConfig)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: list[str] = Field(default_factory=lambda: ["sitemap", "robots", "feed"])


class FeedConfig(BaseModel):
    """[feed] section."""

    model_config = {"frozen": True}

    path: str = "feed.xml"
    limit: int = 20


class RobotsConfig(BaseModel):
    """[robots] section."""

    model_config = {"frozen": True}

    disallow: list[str] = Field(default_factory=list)


class FolioConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    site: SiteConfig = Field(default_factory=SiteConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    css: CssConfig = Field(default_factory=CssConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    robots: RobotsConfig = Field(default_factory=RobotsConfig)
