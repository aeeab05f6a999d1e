"""ESC/POS command buffer for thermal printers."""
from typing import List, Optional, Tuple

from printer_bridge.printer.layout import RECEIPT_WIDTH


class CommandBuffer:
    """Append-only sequence of ESC/POS directives.

    Every call records a ``(directive, payload)`` pair. ``build()`` joins the
    payloads into the byte stream sent to the printer.
    """

    # ESC/POS Command Constants
    ESC = b'\x1b'
    GS = b'\x1d'

    # Initialize printer
    INIT = ESC + b'\x40'  # ESC @

    # Text formatting
    BOLD_ON = ESC + b'\x45\x01'   # ESC E 1
    BOLD_OFF = ESC + b'\x45\x00'  # ESC E 0
    DOUBLE_HEIGHT_ON = ESC + b'\x21\x10'   # ESC ! 16
    QUAD_AREA_ON = ESC + b'\x21\x30'       # ESC ! 48
    NORMAL_SIZE = ESC + b'\x21\x00'        # ESC ! 0

    # Alignment
    ALIGN_LEFT = ESC + b'\x61\x00'    # ESC a 0
    ALIGN_CENTER = ESC + b'\x61\x01'  # ESC a 1
    ALIGN_RIGHT = ESC + b'\x61\x02'   # ESC a 2

    # Paper control
    CUT_FULL = GS + b'\x56\x00'  # GS V 0 - Full cut
    CUT_PARTIAL = GS + b'\x56\x01'  # GS V 1 - Partial cut
    FEED_LINE = b'\n'

    def __init__(self, width: int = RECEIPT_WIDTH, codepage: str = "cp949",
                 line_character: str = "="):
        """Initialize buffer.

        Args:
            width: Character cells per line (32 for 58mm paper)
            codepage: Python codec matching the printer firmware code page
            line_character: Fill character for divider lines
        """
        self.width = width
        self.codepage = codepage
        self.line_character = line_character
        self._commands: List[Tuple[str, bytes]] = []
        self._length = 0

    def _append(self, directive: str, payload: bytes) -> "CommandBuffer":
        self._commands.append((directive, payload))
        self._length += len(payload)
        return self

    def initialize(self) -> "CommandBuffer":
        """Reset printer modes (ESC @)."""
        return self._append("init", self.INIT)

    # Text

    def text(self, content: str) -> "CommandBuffer":
        """Add plain text in the configured code page."""
        return self._append("text", content.encode(self.codepage, errors="replace"))

    def println(self, content: str) -> "CommandBuffer":
        """Add text followed by a line feed."""
        return self.text(content).newline()

    def newline(self, count: int = 1) -> "CommandBuffer":
        """Add newline(s)."""
        return self._append("newline", self.FEED_LINE * count)

    def bold(self, on: bool = True) -> "CommandBuffer":
        """Set bold mode."""
        return self._append("bold", self.BOLD_ON if on else self.BOLD_OFF)

    def double_height(self) -> "CommandBuffer":
        """Set double height mode."""
        return self._append("size", self.DOUBLE_HEIGHT_ON)

    def quad_area(self) -> "CommandBuffer":
        """Set double height and double width."""
        return self._append("size", self.QUAD_AREA_ON)

    def normal(self) -> "CommandBuffer":
        """Reset to normal text size."""
        return self._append("size", self.NORMAL_SIZE)

    # Alignment

    def align_left(self) -> "CommandBuffer":
        return self._append("align", self.ALIGN_LEFT)

    def align_center(self) -> "CommandBuffer":
        return self._append("align", self.ALIGN_CENTER)

    def align_right(self) -> "CommandBuffer":
        return self._append("align", self.ALIGN_RIGHT)

    # Lines and paper

    def line(self, char: Optional[str] = None) -> "CommandBuffer":
        """Print a full-width divider line."""
        return self.println((char or self.line_character) * self.width)

    def feed(self, lines: int = 1) -> "CommandBuffer":
        """Feed paper by number of lines."""
        return self.newline(lines)

    def cut(self, partial: bool = False) -> "CommandBuffer":
        """Cut the paper."""
        return self._append("cut", self.CUT_PARTIAL if partial else self.CUT_FULL)

    # Output

    @property
    def commands(self) -> List[Tuple[str, bytes]]:
        """Recorded directives, oldest first."""
        return list(self._commands)

    def build(self) -> bytes:
        """Build and return the command stream."""
        return b"".join(payload for _, payload in self._commands)

    def preview(self) -> str:
        """Plain text rendering of the buffer, control codes dropped."""
        parts = []
        for directive, payload in self._commands:
            if directive in ("text", "newline"):
                parts.append(payload.decode(self.codepage, errors="replace"))
            elif directive == "cut":
                parts.append("--- CUT ---\n")
        return "".join(parts)

    def clear(self) -> None:
        """Drop every recorded directive."""
        self._commands = []
        self._length = 0

    def is_empty(self) -> bool:
        return self._length == 0

    def __bytes__(self) -> bytes:
        """Allow bytes() conversion."""
        return self.build()

    def __len__(self) -> int:
        """Return byte length."""
        return self._length
