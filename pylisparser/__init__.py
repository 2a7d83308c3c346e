from .parser_combinators import (
  ERR,
  Either,
  Err,
  First,
  Input,
  Ok,
  ParseError,
  Parser,
  Result,
  ResultKind,
  Second,
  any_char,
  char_range,
  character,
  collapse,
  flat_map,
  from_fn,
  get,
  many,
  one_of,
  or_,
  parse_one,
  run,
  until,
  whitespace,
  zip_left,
  zip_right,
)
from .lisp_combinators import (
  LispIdent,
  LispList,
  LispObject,
  LispString,
  parse_lisp,
)
