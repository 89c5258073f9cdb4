"""A reentrant getopt-like command-line option parser with long options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

MSG_INVALID = "invalid option"
MSG_MISSING = "option requires an argument"
MSG_TOOMANY = "option takes no arguments"

# Error messages are limited to the size of a fixed message field.
_ERRMSG_SIZE = 64


class ArgType(IntEnum):
    """Whether an option takes an argument."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A GNU-style long option, optionally paired with a short name."""

    longname: str | None
    shortname: str | None = None
    argtype: ArgType = ArgType.NONE


class OptionError(ValueError):
    """An option was unknown, lacked its argument or had one too many."""

    def __init__(self, message: str, option: str) -> None:
        super().__init__(message)
        self.option = option


def _error(message: str, data: str) -> OptionError:
    prefix = f"{message} -- '"
    room = max(_ERRMSG_SIZE - 2 - len(prefix), 0)
    return OptionError(prefix + data[:room] + "'", data)


def _is_dashdash(arg: str | None) -> bool:
    return arg == "--"


def _is_shortopt(arg: str | None) -> bool:
    return arg is not None and len(arg) >= 2 and arg[0] == "-" and arg[1] != "-"


def _is_longopt(arg: str | None) -> bool:
    return arg is not None and len(arg) > 2 and arg.startswith("--")


def _argtype(optstring: str, char: str) -> ArgType | None:
    if char == ":":
        return None
    index = optstring.find(char)
    if index < 0:
        return None
    if optstring[index + 1 : index + 2] == ":":
        if optstring[index + 2 : index + 3] == ":":
            return ArgType.OPTIONAL
        return ArgType.REQUIRED
    return ArgType.NONE


def _longopts_match(longname: str | None, option: str) -> bool:
    if longname is None:
        return False
    return option.split("=", 1)[0] == longname


def _longopts_arg(option: str) -> str | None:
    _, sep, value = option.partition("=")
    return value if sep else None


class OptParser:
    """Parses options from an argument vector whose first item is the program.

    With ``permute`` set, non-option arguments are moved behind the options
    as parsing goes, so that ``arg()`` can collect them afterwards.
    """

    def __init__(self, argv: Sequence[str], permute: bool = True) -> None:
        self.argv = list(argv)
        self.permute = permute
        self.optind = 1
        self.optopt: str | None = None
        self.optarg: str | None = None
        self.subopt = 0

    def _current(self) -> str | None:
        if self.optind < len(self.argv):
            return self.argv[self.optind]
        return None

    def _permute(self, index: int) -> None:
        self.argv.insert(self.optind - 1, self.argv.pop(index))

    def _skip_nonoption(self, parse_next):
        index = self.optind
        self.optind += 1
        try:
            return parse_next()
        finally:
            self._permute(index)
            self.optind -= 1

    def parse(self, optstring: str) -> str | None:
        """Return the next option character, or None when options are done.

        Raises OptionError for an unknown option or a missing argument;
        parsing can continue after the error.
        """
        self.optopt = None
        self.optarg = None
        option = self._current()
        if option is None:
            return None
        if _is_dashdash(option):
            self.optind += 1
            return None
        if not _is_shortopt(option):
            if self.permute:
                return self._skip_nonoption(lambda: self.parse(optstring))
            return None

        option = option[self.subopt + 1 :]
        char = option[0]
        rest = option[1:]
        self.optopt = char
        argtype = _argtype(optstring, char)
        following = (
            self.argv[self.optind + 1] if self.optind + 1 < len(self.argv) else None
        )

        if argtype is None:
            self.subopt = 0
            self.optind += 1
            raise _error(MSG_INVALID, char)
        if argtype is ArgType.NONE:
            if rest:
                self.subopt += 1
            else:
                self.subopt = 0
                self.optind += 1
            return char
        self.subopt = 0
        self.optind += 1
        if argtype is ArgType.REQUIRED:
            if rest:
                self.optarg = rest
            elif following is not None:
                self.optarg = following
                self.optind += 1
            else:
                raise _error(MSG_MISSING, char)
            return char
        self.optarg = rest or None
        return char

    def arg(self) -> str | None:
        """Step over and return the next non-option argument, or None."""
        option = self._current()
        self.subopt = 0
        if option is not None:
            self.optind += 1
        return option

    def _long_fallback(self, longopts: Sequence[LongOption]) -> LongOption | None:
        optstring = "".join(
            opt.shortname + ":" * int(opt.argtype) for opt in longopts if opt.shortname
        )
        if self.parse(optstring) is None:
            return None
        matched = None
        for opt in longopts:
            if opt.shortname == self.optopt:
                matched = opt
        return matched

    def parse_long(self, longopts: Sequence[LongOption]) -> LongOption | None:
        """Return the next matched option, or None when options are done.

        Short options are looked up by the short names of ``longopts``.
        Raises OptionError on an unknown option or a wrong argument.
        """
        option = self._current()
        if option is None:
            return None
        if _is_dashdash(option):
            self.optind += 1
            return None
        if _is_shortopt(option):
            return self._long_fallback(longopts)
        if not _is_longopt(option):
            if self.permute:
                return self._skip_nonoption(lambda: self.parse_long(longopts))
            return None

        self.optopt = None
        self.optarg = None
        option = option[2:]
        self.optind += 1
        for opt in longopts:
            if not _longopts_match(opt.longname, option):
                continue
            name = opt.longname or ""
            self.optopt = opt.shortname
            value = _longopts_arg(option)
            if opt.argtype is ArgType.NONE and value is not None:
                raise _error(MSG_TOOMANY, name)
            if value is not None:
                self.optarg = value
            elif opt.argtype is ArgType.REQUIRED:
                self.optarg = self._current()
                if self.optarg is None:
                    raise _error(MSG_MISSING, name)
                self.optind += 1
            return opt
        raise _error(MSG_INVALID, option)