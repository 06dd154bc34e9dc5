import builtins
import sys
from typing import Optional, TextIO


class Console:
    """Line-oriented text channel used by print and input.

    With no explicit streams the process's stdout and `builtins.input` are
    used. They are looked up on every call, not captured at construction,
    so redirections made later (for example by pytest) are honoured.
    """
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    @property
    def out(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    def write(self, text: str):
        self.out.write(text)
        self.out.flush()

    def write_line(self, text: str):
        self.out.write(text + '\n')

    def read_line(self, prompt: str = '') -> str:
        """Show `prompt` and read one line; end of input reads as ''."""
        if self.stdin is None:
            if self.stdout is not None:
                # the prompt belongs on the same channel as print
                self.write(prompt)
                prompt = ''
            try:
                return builtins.input(prompt)
            except EOFError:
                return ''
        self.write(prompt)
        line = self.stdin.readline()
        if line.endswith('\n'):
            line = line[:-1]
        if line.endswith('\r'):
            line = line[:-1]
        return line
