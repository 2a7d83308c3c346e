# pylint: disable
"""Parser combinators over in-memory text.

A parser is a value: it holds its configuration (a target character, a
nested parser, ...) as fields and does nothing until `parse` is called on an
`Input`. Every parse returns either `Ok(val, rest)` or the shared `ERR`.
"""
import logging
from collections.abc import Container
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Literal, NoReturn, TypeVar

logger = logging.getLogger(__name__)

class ResultKind(Enum):
  OK = 0
  ERR = 1

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")
R = TypeVar("R")

class ParseError(ValueError):
  """Raised by `Err.unwrap`; carries no position or reason."""

@dataclass(frozen=True)
class Input:
  """Immutable view of `text` starting at offset `pos`."""
  text: str
  pos: int = 0

  @staticmethod
  def of(value: "str | Input") -> "Input":
    if isinstance(value, Input):
      return value
    return Input(value)

  def __len__(self) -> int:
    return len(self.text) - self.pos

  def is_empty(self) -> bool:
    return self.pos >= len(self.text)

  def peek(self) -> str | None:
    if self.is_empty():
      return None
    return self.text[self.pos]

  def advance(self, n: int = 1) -> "Input":
    return Input(self.text, min(self.pos + n, len(self.text)))

  @property
  def remaining(self) -> str:
    return self.text[self.pos:]

  def consumed_since(self, earlier: "Input") -> str:
    """Text matched between the snapshot `earlier` and this one."""
    return self.text[earlier.pos:self.pos]

@dataclass(init=False)
class Ok(Generic[T]):
  kind: Literal[ResultKind.OK]
  val: T
  rest: Input

  def __init__(self, val: T, rest: Input):
    self.kind = ResultKind.OK
    self.val = val
    self.rest = rest

  def map(self, f: Callable[[T], R]) -> "Ok[R]":
    return Ok(f(self.val), self.rest)

  def unwrap(self) -> T:
    return self.val

@dataclass(init=False)
class Err:
  kind: Literal[ResultKind.ERR]

  def __init__(self):
    self.kind = ResultKind.ERR

  def map(self, f: Callable[[Any], Any]) -> "Err":
    return self

  def unwrap(self) -> NoReturn:
    raise ParseError("no match")

ERR = Err()

Result = Ok[T] | Err

@dataclass(frozen=True)
class First(Generic[A]):
  """The left branch of an `or_` matched."""
  val: A

@dataclass(frozen=True)
class Second(Generic[B]):
  """The left branch of an `or_` failed and the right one matched."""
  val: B

Either = First[A] | Second[B]

def get(value: Any) -> Any:
  """Project a possibly nested `Either` down to the value of whichever branch matched.

  Values that are not an `Either` are returned as they are, so
  `(p | q) | r` collapses to a single type when `p`, `q` and `r` share one.
  """
  while isinstance(value, (First, Second)):
    value = value.val
  return value

class Parser(Generic[T]):
  """Base of every parser. Subclasses implement `parse`."""

  def parse(self, inp: Input) -> Result[T]:
    raise NotImplementedError

  def parse_str(self, text: "str | Input") -> Result[T]:
    return self.parse(Input.of(text))

  def map(self, transformer: Callable[[T], R]) -> "Parser[R]":
    return Map(self, transformer)

  def flat_map(self, parser2_func: "Callable[[T], Parser[R]]") -> "Parser[R]":
    return FlatMap(self, parser2_func)

  def zip_left(self, parser2: "Parser[Any]") -> "Parser[T]":
    return ZipLeft(self, parser2)

  def zip_right(self, parser2: "Parser[R]") -> "Parser[R]":
    return ZipRight(self, parser2)

  def or_(self, parser2: "Parser[R]") -> "Parser[Either[T, R]]":
    return Or(self, parser2)

  def until(self, terminator: "Parser[Any]") -> "Parser[list[T]]":
    return Until(self, terminator)

  def collapse(self) -> "Parser[Any]":
    return Map(self, get)

  def __or__(self, parser2: "Parser[R]") -> "Parser[Either[T, R]]":
    return Or(self, parser2)

  def __lshift__(self, parser2: "Parser[Any]") -> "Parser[T]":
    return ZipLeft(self, parser2)

  def __rshift__(self, parser2: "Parser[R]") -> "Parser[R]":
    return ZipRight(self, parser2)

@dataclass
class Map(Parser[R], Generic[T, R]):
  parser: Parser[T]
  f: Callable[[T], R]

  def parse(self, inp: Input) -> Result[R]:
    return self.parser.parse(inp).map(self.f)

@dataclass
class FlatMap(Parser[R], Generic[T, R]):
  """Runs `parser`, then the parser `f` builds from its value on the remainder."""
  parser: Parser[T]
  f: Callable[[T], Parser[R]]

  def parse(self, inp: Input) -> Result[R]:
    res1 = self.parser.parse(inp)
    if res1.kind is ResultKind.ERR:
      return res1
    return self.f(res1.val).parse(res1.rest)

@dataclass
class ZipLeft(Parser[T], Generic[T]):
  left: Parser[T]
  right: Parser[Any]

  def parse(self, inp: Input) -> Result[T]:
    res1 = self.left.parse(inp)
    if res1.kind is ResultKind.ERR:
      return res1
    res2 = self.right.parse(res1.rest)
    if res2.kind is ResultKind.ERR:
      return res2
    return Ok(res1.val, res2.rest)

@dataclass
class ZipRight(Parser[R], Generic[R]):
  left: Parser[Any]
  right: Parser[R]

  def parse(self, inp: Input) -> Result[R]:
    res1 = self.left.parse(inp)
    if res1.kind is ResultKind.ERR:
      return res1
    return self.right.parse(res1.rest)

@dataclass
class Or(Parser[Either[A, B]], Generic[A, B]):
  """Left-biased choice; both branches start from the same input."""
  first: Parser[A]
  second: Parser[B]

  def parse(self, inp: Input) -> Result[Either[A, B]]:
    res1 = self.first.parse(inp)
    if res1.kind is ResultKind.OK:
      return res1.map(First)
    return self.second.parse(inp).map(Second)

@dataclass
class Many(Parser[list[T]], Generic[T]):
  """Zero or more repetitions of `parser`. Never fails.

  An element that succeeds without consuming anything ends the repetition
  and is not collected, since repeating it could never make progress.
  """
  parser: Parser[T]

  def parse(self, inp: Input) -> Result[list[T]]:
    fullparsed: list[T] = []
    curr = inp
    while True:
      res = self.parser.parse(curr)
      if res.kind is ResultKind.ERR or res.rest.pos == curr.pos:
        return Ok(fullparsed, curr)
      fullparsed.append(res.val)
      curr = res.rest

@dataclass
class Until(Parser[list[T]], Generic[T]):
  """Repeats `parser` until `terminator` would match.

  The terminator is only probed, never consumed: on success the remainder
  starts at the terminator, so callers follow up with e.g.
  `p.until(end).zip_left(end)`. Fails on empty input, when `parser` fails
  before the terminator matches, or when `parser` stops making progress.
  """
  parser: Parser[T]
  terminator: Parser[Any]

  def parse(self, inp: Input) -> Result[list[T]]:
    if inp.is_empty():
      return ERR
    fullparsed: list[T] = []
    curr = inp
    while self.terminator.parse(curr).kind is ResultKind.ERR:
      res = self.parser.parse(curr)
      if res.kind is ResultKind.ERR or res.rest.pos == curr.pos:
        return ERR
      fullparsed.append(res.val)
      curr = res.rest
    return Ok(fullparsed, curr)

class CharParser(Parser[str]):
  """Consumes one character accepted by `matches`."""

  def matches(self, ch: str) -> bool:
    raise NotImplementedError

  def parse(self, inp: Input) -> Result[str]:
    ch = inp.peek()
    if ch is None or not self.matches(ch):
      return ERR
    return Ok(ch, inp.advance())

def _check_char(name: str, c: str) -> None:
  if not isinstance(c, str) or len(c) != 1:
    raise ValueError(f"{name} expects a single character, got {c!r}")

@dataclass
class Character(CharParser):
  c: str

  def __post_init__(self):
    _check_char("character", self.c)

  def matches(self, ch: str) -> bool:
    return ch == self.c

@dataclass
class CharRange(CharParser):
  """Inclusive `lo..=hi`. An inverted range matches nothing."""
  lo: str
  hi: str

  def __post_init__(self):
    _check_char("char_range", self.lo)
    _check_char("char_range", self.hi)

  def matches(self, ch: str) -> bool:
    return self.lo <= ch <= self.hi

@dataclass
class OneOf(CharParser):
  chars: Container[str]

  def matches(self, ch: str) -> bool:
    return ch in self.chars

@dataclass
class AnyChar(CharParser):
  def matches(self, ch: str) -> bool:
    return True

@dataclass
class FromFn(Parser[T], Generic[T]):
  f: Callable[[Input], Result[T]] = field(repr=False)

  def parse(self, inp: Input) -> Result[T]:
    return self.f(inp)

def character(c: str) -> Parser[str]:
  return Character(c)

def char_range(lo: str, hi: str) -> Parser[str]:
  return CharRange(lo, hi)

def one_of(chars: Container[str]) -> Parser[str]:
  return OneOf(chars)

def any_char() -> Parser[str]:
  return AnyChar()

def from_fn(f: Callable[[Input], Result[T]]) -> Parser[T]:
  """Wraps `f` as a parser.

  `f` receives the current `Input` and returns `Ok(val, rest)` or `ERR`. It
  may close over state of its own; that state lives as long as the returned
  parser does and is seen by every parse made with it.
  """
  return FromFn(f)

def whitespace() -> Parser[None]:
  return (character(" ") | character("\n") | character("\t")).map(lambda _: None)

def flat_map(parser: Parser[T], parser2_func: Callable[[T], Parser[R]]) -> Parser[R]:
  return FlatMap(parser, parser2_func)

def zip_left(parser1: Parser[T], parser2: Parser[Any]) -> Parser[T]:
  return ZipLeft(parser1, parser2)

def zip_right(parser1: Parser[Any], parser2: Parser[R]) -> Parser[R]:
  return ZipRight(parser1, parser2)

def or_(parser1: Parser[A], parser2: Parser[B]) -> Parser[Either[A, B]]:
  return Or(parser1, parser2)

def collapse(parser: Parser[Any]) -> Parser[Any]:
  return parser.collapse()

def many(parser: Parser[T]) -> Parser[list[T]]:
  return Many(parser)

def until(parser: Parser[T], terminator: Parser[Any]) -> Parser[list[T]]:
  return Until(parser, terminator)

def parse_one(parser: Parser[T], text: "str | Input") -> Result[T]:
  return parser.parse(Input.of(text))

def run(parser: Parser[T], text: "str | Input") -> Result[T]:
  """Parses all of `text`; trailing unconsumed input is a failure."""
  inp = Input.of(text)
  res = parser.parse(inp)
  if res.kind is ResultKind.ERR:
    logger.debug("%s did not match input of length %d", type(parser).__name__, len(inp))
    return res
  if not res.rest.is_empty():
    logger.debug("%s left %d of %d characters unconsumed", type(parser).__name__, len(res.rest), len(inp))
    return ERR
  return res
