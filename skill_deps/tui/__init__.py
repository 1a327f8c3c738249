from skill_deps.tui.renderers import DepsConsoleUI

__all__ = ["DepsConsoleUI"]
