"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `lookup` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import WeatherResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se omite en modo `--json` para no ensuciar pipelines.
    """

    title = Text("CEP-WEATHER", style="bold cyan")
    subtitle = Text("CEP • Cidade • Temperatura", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_weather_table(code: str, result: WeatherResult) -> Table:
    """Tabla Rich con el resultado compuesto de un CEP."""

    table = Table(title=f"CEP {code}")
    table.add_column("City", style="cyan", no_wrap=True)
    table.add_column("°C", style="white", justify="right")
    table.add_column("°F", style="white", justify="right")
    table.add_column("K", style="green", justify="right")
    table.add_row(result.city, f"{result.temp_c:g}", f"{result.temp_f:g}", f"{result.temp_k:g}")
    return table


def build_error_panel(message: str, status_code: int) -> Panel:
    body = Text(message.strip() or "unknown error")
    return Panel(body, title=Text(f"HTTP {status_code}", style="bold red"), border_style="red")
