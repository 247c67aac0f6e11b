"""
Interactive console session: colored status lines and yes/no prompts.
"""

import sys
from typing import TextIO


class Colors:
    """ANSI color codes for terminal output."""
    RESET = '\033[0m'
    BRIGHT = '\033[1m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    RED = '\033[31m'
    CYAN = '\033[36m'

    _BY_NAME = {
        'reset': RESET,
        'bright': BRIGHT,
        'green': GREEN,
        'yellow': YELLOW,
        'red': RED,
        'cyan': CYAN,
    }

    @classmethod
    def for_name(cls, name: str) -> str:
        """Look up a color code by name, falling back to reset."""
        return cls._BY_NAME.get(name, cls.RESET)


AFFIRMATIVE_ANSWERS = ('y', 'yes')


class PatchSession:
    """
    One run's worth of console interaction.

    Input and output streams are injected so the patcher can be driven from
    tests or other front ends rather than a real terminal.
    """

    def __init__(
        self,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        use_color: bool | None = None
    ):
        """
        Initialize the session.

        Args:
            input_stream: Where answers are read from (defaults to stdin)
            output_stream: Where status lines and prompts go (defaults to stdout)
            use_color: Force colors on or off; by default colors are used only on a TTY
        """
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self._owns_input = input_stream is None

        if use_color is None:
            isatty = getattr(self._output, 'isatty', None)
            use_color = bool(isatty and isatty())

        self._use_color = use_color
        self._closed = False

    @property
    def use_color(self) -> bool:
        """True if status lines are colorized."""
        return self._use_color

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    def print(self, message: str, color: str = 'reset') -> None:
        """
        Write one status line.

        Args:
            message: Text to write
            color: Color name ('reset', 'bright', 'green', 'yellow', 'red', 'cyan')
        """
        if self._use_color:
            message = f"{Colors.for_name(color)}{message}{Colors.RESET}"

        self._output.write(message + '\n')
        self._output.flush()

    def ask(self, question: str, default_yes: bool = True) -> bool:
        """
        Ask a yes/no question and wait for one line of input.

        An empty answer, or end of input, selects the default.  Anything other
        than an explicit yes is treated as no.

        Args:
            question: Question text, without the (Y/n) suffix
            default_yes: Answer to use for empty input

        Returns:
            True for yes, False for no
        """
        suffix = ' (Y/n): ' if default_yes else ' (y/N): '
        self._output.write(question + suffix)
        self._output.flush()

        answer = self._input.readline().strip().lower()
        if answer == '':
            return default_yes

        return answer in AFFIRMATIVE_ANSWERS

    def close(self) -> None:
        """Release the input stream.  Streams owned by the caller are left open."""
        if self._closed:
            return

        self._closed = True
        if not self._owns_input:
            return

        self._input.close()
