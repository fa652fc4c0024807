# rpncalc

An interactive calculator that reads expressions in reverse Polish notation
(or normal Polish notation) and prints their value. You can also define your
own one-argument functions and call them in later expressions.

## Installation

```
pip install .
```

## Running

```
rpncalc
```

Start in normal Polish notation instead:

```
rpncalc --pn
```

The calculator reads lines from standard input until `exit` or end of input.
Empty lines are skipped.

## Usage

Tokens are separated by single spaces. Enter an expression at the `> ` prompt
and its value is printed.

Supported tokens:

- numbers such as `3`, `-2`, `1.5`
- constants `pi` and `e`
- binary operators `+ - * / ^`
- unary functions `sqrt`, `abs`, `sin`, `cos` (case-insensitive)
- `x`, the variable, inside a function definition
- the name of any function you have defined

An unknown token, or a missing operand, is read as `0`. Tokens left over
after a complete expression are ignored. Invalid operations such as the
square root of a negative number or `0 0 /` give `nan`; division of a
non-zero number by zero gives `inf` or `-inf`.

Commands:

- `switch` toggles between reverse and normal Polish notation
- `def <name>` starts a function definition; the prompt changes to
  `<name>(x) > ` and the next line is the body, written in terms of `x`.
  A name that is already defined keeps its first definition.
- `exit` quits

Example session:

```
> 3 4 +
7
> 2 sqrt
1.41421
> def sq
sq(x) > x x *
> 5 sq
25
> switch
Switched notation from Reverse to Normal
> - 10 4
6
> exit
```

## Using it from Python

```python
from rpncalc.cli import Session

session = Session()
print(session.handle_line("3 4 +"))  # "7"
```

`Session(reversed_order=False)` starts in normal Polish notation.
`Session.handle_line` returns the text to print, or `None` for commands and
function definitions; `Session.prompt()` and `Session.notation()` give the
current prompt and notation name, and `Session.finished` is set after `exit`.

The expression tree itself lives in `rpncalc.expressions`. Build a node with
`create_expression(tokens, state)` from a list of tokens and a `ParserState`,
call its `parse(tokens, state)` to consume the tokens from the end of the
list, then `value(state)` to evaluate it. `get_operator`, `is_number`,
`is_constant` and `get_constant` classify single tokens.

## Running the tests

```
pip install .[test]
pytest
```