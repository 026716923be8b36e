from __future__ import annotations

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Footer, Header, Input, ListItem, ListView, Static

from ..config import Settings
from ..pages import PageResolver, list_pages
from ..render import AnsiCapabilities, StyleResolver, render_document

APP_CSS = """
Screen {
    background: $panel;
}

#page-filter {
    margin: 0 1;
}

#browser {
    height: 1fr;
}

#page-list {
    width: 32;
    border: round $accent;
    background: $boost;
}

#preview-scroll {
    width: 1fr;
    border: round $accent;
    padding: 0 1;
    background: $surface;
}
"""


class PageBrowserApp(App):
    """Browse cached tldr pages with a live rendered preview."""

    CSS_PATH = None
    CSS = APP_CSS
    TITLE = "tldr"
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "quit", "Quit"),
    ]

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self.settings = settings
        self.resolver = PageResolver(settings)
        self.styles = StyleResolver(AnsiCapabilities(), settings.style_overrides)
        self.all_pages: list[str] = list_pages(settings)
        self.filter_text = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Filter pages", id="page-filter")
        yield Horizontal(
            ListView(id="page-list"),
            VerticalScroll(Static("Select a page.", id="preview"), id="preview-scroll"),
            id="browser",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_page_list()

    # ---- State helpers -----------------------------------------------------------
    def page_names(self) -> list[str]:
        needle = self.filter_text.strip().lower()
        if not needle:
            return list(self.all_pages)
        return [name for name in self.all_pages if needle in name]

    def render_preview(self, command: str) -> Text:
        location = self.resolver.resolve(command)
        if location is None or location.path is None:
            return Text(f"No cached page for {command}.", style="italic")
        try:
            source = location.path.read_text(encoding="utf-8")
        except OSError as exc:
            return Text(f"Could not read {location.path}: {exc}", style="italic")
        return Text.from_ansi(render_document(source, self.styles))

    # ---- Widgets -----------------------------------------------------------------
    def refresh_page_list(self) -> None:
        list_view = self.query_one("#page-list", ListView)
        list_view.clear()
        for name in self.page_names():
            item = ListItem(Static(name, markup=False))
            item.data = name
            list_view.append(item)

    @on(Input.Changed, "#page-filter")
    def handle_filter(self, event: Input.Changed) -> None:
        self.filter_text = event.value
        self.refresh_page_list()

    @on(ListView.Highlighted, "#page-list")
    def handle_highlight(self, event: ListView.Highlighted) -> None:
        name = getattr(event.item, "data", None)
        if not name:
            return
        self.query_one("#preview", Static).update(self.render_preview(str(name)))
