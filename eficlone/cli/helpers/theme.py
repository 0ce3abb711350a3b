"""Unified theme for consistent Rich styling of eficlone output."""

from rich.console import Console
from rich.table import Table
from rich.theme import Theme


class Colors:
    """Standardized color palette for CLI output."""

    # Status colors
    SUCCESS = "bold green"
    ERROR = "bold red"
    WARNING = "bold yellow"
    INFO = "bold blue"

    # UI element colors
    PRIMARY = "cyan"
    SECONDARY = "blue"
    ACCENT = "magenta"
    MUTED = "dim"

    HEADER = "bold cyan"
    NORMAL = "white"


class Icons:
    """Standardized icons for different message types."""

    SUCCESS = "✅"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"
    BULLET = "•"
    ARROW = "→"
    DISK = "💾"

    _TEXT_FALLBACKS = {
        "SUCCESS": "✓",
        "ERROR": "✗",
        "WARNING": "!",
        "INFO": "i",
        "BULLET": "•",
        "ARROW": "->",
        "DISK": "",
    }

    @classmethod
    def get_icon(cls, icon_name: str, icon_mode: str = "emoji") -> str:
        """Get icon based on the specified mode.

        Args:
            icon_name: Name of the icon (e.g., "SUCCESS", "ERROR")
            icon_mode: Icon mode - "emoji" or "text"

        Returns:
            The appropriate icon based on mode
        """
        if icon_mode == "emoji":
            return str(getattr(cls, icon_name, ""))
        return cls._TEXT_FALLBACKS.get(icon_name, f"[{icon_name}]")

    @classmethod
    def format_with_icon(
        cls, icon_name: str, text: str, icon_mode: str = "emoji"
    ) -> str:
        icon = cls.get_icon(icon_name, icon_mode)
        return f"{icon} {text}" if icon else text


EFICLONE_THEME = Theme(
    {
        "success": Colors.SUCCESS,
        "error": Colors.ERROR,
        "warning": Colors.WARNING,
        "info": Colors.INFO,
        "primary": Colors.PRIMARY,
        "secondary": Colors.SECONDARY,
        "accent": Colors.ACCENT,
        "muted": Colors.MUTED,
        "header": Colors.HEADER,
    }
)


class ThemedConsole:
    """Console wrapper with the eficlone theme applied."""

    def __init__(
        self, icon_mode: str = "emoji", console: Console | None = None
    ) -> None:
        self.console = console or Console(theme=EFICLONE_THEME)
        self.icon_mode = icon_mode

    def print_success(self, message: str) -> None:
        text = Icons.format_with_icon("SUCCESS", message, self.icon_mode)
        self.console.print(text, style="success")

    def print_error(self, message: str) -> None:
        text = Icons.format_with_icon("ERROR", message, self.icon_mode)
        self.console.print(text, style="error")

    def print_warning(self, message: str) -> None:
        text = Icons.format_with_icon("WARNING", message, self.icon_mode)
        self.console.print(text, style="warning")

    def print_info(self, message: str) -> None:
        text = Icons.format_with_icon("INFO", message, self.icon_mode)
        self.console.print(text, style="info")

    def print_list_item(self, message: str, indent: int = 1) -> None:
        """Print list item with bullet and styling."""
        spacing = "  " * indent
        bullet = Icons.get_icon("BULLET", self.icon_mode)
        self.console.print(
            f"{spacing}{bullet} {message}", style="primary", highlight=False
        )


class TableStyles:
    """Predefined table styling templates."""

    @staticmethod
    def create_basic_table(
        title: str = "", icon: str = "", icon_mode: str = "emoji"
    ) -> Table:
        full_title = Icons.format_with_icon(icon, title, icon_mode) if icon else title
        return Table(
            title=full_title,
            show_header=True,
            header_style=Colors.HEADER,
            border_style=Colors.SECONDARY,
        )

    @staticmethod
    def create_partition_table(icon_mode: str = "emoji") -> Table:
        """Create table for the resolved source and destination."""
        table = TableStyles.create_basic_table("EFI Partitions", "DISK", icon_mode)
        table.add_column("Side", style=Colors.PRIMARY, no_wrap=True)
        table.add_column("Volume", style=Colors.NORMAL)
        table.add_column("Disk", style=Colors.ACCENT)
        table.add_column("EFI Partition", style="bold")
        table.add_column("Mount Point", style=Colors.MUTED)
        return table


def get_themed_console(icon_mode: str = "emoji") -> ThemedConsole:
    """Get a themed console instance."""
    return ThemedConsole(icon_mode=icon_mode)
