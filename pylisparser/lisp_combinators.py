"""A small Lisp-like reader built from the combinators in `parser_combinators`.

    (define greeting ("hello" world) ())

Lists nest to any depth, strings are double-quoted with no escapes, and
identifiers are `[_A-Za-z][_A-Za-z0-9]*`. Whitespace separates list items.
"""
from dataclasses import dataclass

from toolz import compose, itertoolz

from .parser_combinators import (
  ERR,
  Input,
  Parser,
  Result,
  ResultKind,
  char_range,
  character,
  any_char,
  from_fn,
  many,
  run,
  whitespace,
)

@dataclass
class LispList:
  items: "list[LispObject]"

@dataclass
class LispString:
  value: str

@dataclass
class LispIdent:
  name: str

LispObject = LispList | LispString | LispIdent

def _ident_start() -> Parser[str]:
  return (character("_") | char_range("a", "z") | char_range("A", "Z")).collapse()

def _digit() -> Parser[str]:
  return char_range("0", "9")

def string() -> Parser[str]:
  quote = character('"')
  return (
    quote
    .flat_map(lambda _: any_char().until(quote))
    .zip_left(quote)
    .map("".join)
  )

def ident() -> Parser[str]:
  rest = many((_ident_start() | _digit()).collapse())
  return _ident_start().flat_map(
    lambda first: rest.map(lambda chars: "".join(itertoolz.concatv([first], chars)))
  )

def number() -> Parser[int]:
  """One or more decimal digits."""
  digits = many(_digit())
  to_int = compose(int, "".join)

  def number_impl(inp: Input) -> Result[int]:
    res = digits.parse(inp)
    if res.kind is ResultKind.ERR or not res.val:
      return ERR
    return res.map(to_int)
  return from_fn(number_impl)

def lisp_string() -> Parser[LispObject]:
  return string().map(LispString)

def lisp_ident() -> Parser[LispObject]:
  return ident().map(LispIdent)

def lisp_object() -> Parser[LispObject]:
  # Built on first use so that lisp_object and lisp_list can refer to each other.
  return from_fn(
    lambda inp: (lisp_string() | lisp_ident() | lisp_list()).collapse().parse(inp)
  )

def lisp_list() -> Parser[LispObject]:
  spaces = many(whitespace())
  return (
    character("(")
    .zip_left(spaces)
    .zip_right(many(lisp_object().zip_left(spaces)))
    .zip_left(spaces)
    .zip_left(character(")"))
    .zip_left(spaces)
    .map(LispList)
  )

def parse_lisp(text: str) -> LispObject:
  """Reads exactly one object spanning all of `text`; raises `ParseError` otherwise."""
  return run(lisp_object(), text).unwrap()
