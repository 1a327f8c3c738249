from enum import Enum

from skill_deps.models import Classification


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


CLASSIFICATION_STYLE = {
    Classification.PRESENT: UIStyle.GREEN.value,
    Classification.MISSING: UIStyle.RED.value,
}
