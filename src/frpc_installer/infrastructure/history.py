"""Shell history cleanup, used so the FRP token does not linger on disk."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

HISTORY_FILES = (".bash_history", ".zsh_history", ".history")


class HistoryCleaner:
    """Truncates shell history files in a home directory."""

    def __init__(self, home: Optional[Path] = None, console: Optional[Console] = None):
        self.home = Path(home) if home else Path.home()
        self.console = console or Console()

    def clean(self) -> List[Path]:
        cleared = []
        for name in HISTORY_FILES:
            history_file = self.home / name
            if history_file.is_file():
                history_file.write_text("")
                cleared.append(history_file)
                self.console.print(f"* Cleared {history_file}")

        if not cleared:
            self.console.print("* No shell history files found")
        # The running shell keeps its own copy in memory
        self.console.print("[yellow]Run 'history -c' in your current shell to clear its in-memory history[/yellow]")
        return cleared
