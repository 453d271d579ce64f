from __future__ import annotations

import asyncio
import webbrowser
from typing import Any, Callable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from studybrowser.model import Course, Level, Material, Week
from studybrowser.navigator import Navigator
from studybrowser.view import View

HELP = "<number> open item | /text search | / clear search | b back | r refresh | q quit"

NO_DESCRIPTION = "No description available"

PromptFn = Callable[[str], str]


def _short(text: str, max_len: int = 60) -> str:
    text = " ".join(text.split())
    if len(text) > max_len:
        return text[: max_len - 1].rstrip() + "…"
    return text


def _item_row(i: int, item: Any) -> list[str]:
    title = escape(item.title)
    if isinstance(item, Course):
        return [str(i), f"[bold cyan]{title}[/]", escape(_short(item.description or NO_DESCRIPTION))]
    if isinstance(item, Week):
        return [str(i), f"[yellow]Week {item.week_number}[/] {title}", escape(_short(item.description or NO_DESCRIPTION))]

    kind = "[green]link[/]" if item.is_link else f"[magenta]{escape(item.material_type or 'file')}[/]"
    return [str(i), f"{kind} {title}", escape(_short(item.description))]


def render(view: View, console: Console) -> None:
    """
    Print the current view: heading, search state, error, then the items table.
    """
    console.print(f"\n=== {escape(view.heading)} ===")
    if view.query:
        console.print(f"Search: [bold]{escape(view.query)}[/] ({len(view.items)} of {view.total})")

    if view.error:
        console.print(f"[bold red]{view.error}[/]")

    if view.loading and not view.items:
        console.print("Loading...")
        return

    if not view.items:
        if not view.error:
            console.print(f"[bold]{view.empty_title}[/]")
            console.print(view.empty_hint)
        return

    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column(view.level.value.capitalize())
    table.add_column("Description")
    for i, item in enumerate(view.items, start=1):
        table.add_row(*_item_row(i, item))
    console.print(table)


def _show_material(material: Material, console: Console, prompt: PromptFn) -> None:
    console.print(f"\n[bold]{escape(material.title)}[/] ({escape(material.material_type or 'file')})")
    if material.description:
        console.print(escape(material.description))
    console.print(f"Location: {escape(material.content)}")

    if not material.content:
        return
    try:
        open_now = prompt("Open material in browser? [Y/n]: ").strip().lower()
    except EOFError:
        return
    if open_now != "n":
        webbrowser.open(material.content)


async def _wait(task: Optional[asyncio.Task], console: Console) -> None:
    if task is None:
        return
    with console.status("Loading..."):
        await task


async def run_browser(
    navigator: Navigator,
    console: Optional[Console] = None,
    prompt: Optional[PromptFn] = None,
) -> None:
    """
    Interactive browsing loop. Returns when the user quits (or input ends).
    """
    console = console if console is not None else Console()
    prompt = prompt if prompt is not None else console.input

    await _wait(navigator.start(), console)

    while True:
        view = navigator.view()
        render(view, console)
        console.print(HELP)

        try:
            choice = prompt("Select: ").strip()
        except EOFError:
            choice = "q"

        if choice.lower() == "q":
            console.print("Bye.")
            return

        if choice.startswith("/"):
            navigator.set_query(choice[1:].strip())
            continue

        if choice.lower() == "b":
            navigator.back()
            continue

        if choice.lower() == "r":
            await _wait(navigator.refresh(), console)
            continue

        if not choice:
            continue
        if not choice.isdigit():
            console.print("Invalid choice.")
            continue

        i = int(choice)
        if not (1 <= i <= len(view.items)):
            console.print("Out of range.")
            continue

        item = view.items[i - 1]
        if view.level is Level.MATERIALS:
            _show_material(item, console, prompt)
            continue

        if view.level is Level.COURSES:
            await _wait(navigator.select_course(item), console)
        else:
            await _wait(navigator.select_week(item), console)
