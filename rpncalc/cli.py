"""Interactive calculator for prefix and postfix notation."""

from __future__ import annotations

import sys

from .expressions import ParserState, create_expression

PROMPT = "> "


def split_input(line: str) -> list[str]:
    """Split a line on single spaces, keeping inner empty fields."""
    parts = line.split(" ")
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def _format_value(value: float) -> str:
    return f"{value:g}"


class Session:
    """One interactive calculator session."""

    def __init__(self, reversed_order: bool = True) -> None:
        self.state = ParserState(reversed_order=reversed_order)
        self.finished = False
        self._function_name = ""
        self._prompt = PROMPT

    def notation(self) -> str:
        return "Reverse" if self.state.reversed_order else "Normal"

    def prompt(self) -> str:
        return self._prompt

    def handle_line(self, line: str) -> str | None:
        """Process one input line and return the text to print, if any."""
        tokens = split_input(line)
        if not tokens:
            return None
        command = tokens[0]
        if command == "switch":
            before = self.notation()
            self.state.reversed_order = not self.state.reversed_order
            return f"Switched notation from {before} to {self.notation()}"
        if command == "def" and len(tokens) == 2:
            self.state.parsing_function = True
            self._function_name = tokens[1]
            self._prompt = f"{self._function_name}(x) {self._prompt}"
            return None
        if command == "exit":
            self.finished = True
            return None

        if not self.state.reversed_order:
            tokens.reverse()
        expr = create_expression(tokens, self.state)
        expr.parse(tokens, self.state)
        if self.state.parsing_function:
            self.state.parsing_function = False
            self.state.functions.setdefault(self._function_name, expr)
            self._function_name = ""
            self._prompt = PROMPT
            return None
        return _format_value(expr.value(self.state))


def main(argv: list[str] | None = None) -> int:
    """Run the calculator on standard input and output."""
    args = sys.argv[1:] if argv is None else argv
    session = Session(reversed_order="--pn" not in args)
    print(
        f"RPNCalc. Parsing using {session.notation()} Polish notation. "
        "To end type 'exit'. To switch notation type 'switch'. "
        "To define a function type 'def <name>'. Variable name is x."
    )
    while not session.finished:
        sys.stdout.write(session.prompt())
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            break
        line = line.rstrip("\n")
        if not line:
            continue
        output = session.handle_line(line)
        if output is not None:
            print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())