# handlers/table_handler.py
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from models import TradeSetup

_SIGNAL_STYLE = {"LONG": "bold green", "SHORT": "bold red", "WAIT": "yellow"}


def build_table(setup: TradeSetup, symbol: str) -> Table:
    table = Table(title=f"{symbol} signal", box=box.ROUNDED, show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for key, value in setup.model_dump().items():
        if value is None:
            continue
        if isinstance(value, float):
            value = f"{value:.4f}"
        style = _SIGNAL_STYLE.get(value, "") if key == "signal" else ""
        table.add_row(key, f"[{style}]{value}[/]" if style else str(value))
    return table


def make_table_handler(symbol: str, console: Optional[Console] = None, clear: bool = True):
    console = console or Console()

    def handler(setup: TradeSetup) -> None:
        if clear:
            console.clear()
        console.print(build_table(setup, symbol))
    return handler
