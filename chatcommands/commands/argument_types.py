"""Command argument types and definitions.

Every argument validates one raw token in three layers:

- ``get_value`` coerces the token (``None`` stays ``None`` for most types)
  and returns the value or an :class:`InvalidArgumentError`.
- ``get_with_default`` applies ``required``, ``default`` and ``choices``.
- ``get`` wraps the outcome into an :class:`ArgumentValue` and tells the
  user about errors through the context's ``send`` collaborator.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Mapping, Optional
from urllib.parse import urlsplit

import webcolors
from humanfriendly import InvalidSize, InvalidTimespan, parse_size, parse_timespan

from ..errors import CommandError, InvalidArgumentError
from .values import ArgumentValue

logger = logging.getLogger(__name__)

Context = Optional[Mapping[str, Any]]

# Descriptor spellings accepted in addition to the field names
_FIELD_ALIASES = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "choiceCaseSensitive": "choice_case_sensitive",
    "allowAlias": "allow_alias",
    "defaultOnFailure": "default_on_failure",
}


@dataclass
class Argument:
    """Generic argument: accepts any token unchanged."""

    key: str
    description: str = ""
    default: Any = None
    required: bool = False
    choices: Optional[list[Any]] = None
    choice_case_sensitive: bool = False
    default_on_failure: Optional[bool] = None

    type_name: ClassVar[str] = "generic"

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        return value

    def get_with_default(
        self,
        value: Any,
        context: Context = None,
        registry: Any = None,
        default_replaces_failure: bool = True,
    ) -> Any:
        result = self.get_value(value, context, registry)

        if self.required and result is None:
            return self.invalid(context, "argument_required", value)

        replace_failure = (
            default_replaces_failure if self.default_on_failure is None else self.default_on_failure
        )
        failed = isinstance(result, InvalidArgumentError)
        if self.default is not None and (result is None or (failed and replace_failure)):
            result = self.default

        if isinstance(result, InvalidArgumentError) or self.choices is None:
            return result
        return self._resolve_choice(result, value, context)

    def get(
        self,
        value: Any,
        context: Context = None,
        registry: Any = None,
        default_replaces_failure: bool = True,
    ) -> ArgumentValue:
        result = ArgumentValue.of(
            self.get_with_default(value, context, registry, default_replaces_failure)
        )
        if not result.success:
            logger.debug(f"Argument {self.key} rejected {value!r}: {result.error.code}")
            send = (context or {}).get("send")
            if send:
                send(result.error.message)
        return result

    def invalid(self, context: Context, code: str, value: Any) -> InvalidArgumentError:
        """Build the error for ``value`` with localization code ``code``."""
        return InvalidArgumentError(self, context, code, value)

    def _resolve_choice(self, result: Any, value: Any, context: Context) -> Any:
        for choice in self.choices:
            if choice == result:
                return choice
            if (
                not self.choice_case_sensitive
                and isinstance(choice, str)
                and isinstance(result, str)
                and choice.casefold() == result.casefold()
            ):
                return choice
        return self.invalid(context, "argument_unavailable_choice", value)


@dataclass
class StringArgument(Argument):
    """Text of at least ``min_length`` and less than ``max_length`` characters.

    ``min_length`` is inclusive: with ``min_length=3`` the text ``"abc"`` is
    accepted and ``"ab"`` is too short. The empty string passes by default.
    ``max_length`` is exclusive.
    """

    min_length: int = 0
    max_length: Optional[int] = None
    matches: Optional[str] = None

    type_name: ClassVar[str] = "string"

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if value is None:
            return None

        text = str(value)
        if self.matches is not None and not re.search(self.matches, text):
            return self.invalid(context, "string_argument_regexp_fail", value)
        if self.max_length is not None and len(text) >= self.max_length:
            return self.invalid(context, "string_argument_too_long", value)
        if len(text) < self.min_length:
            return self.invalid(context, "string_argument_too_short", value)
        return text


@dataclass
class IntegerArgument(Argument):
    """Whole number; ``min`` and ``max`` are exclusive bounds."""

    min: Optional[int] = None
    max: Optional[int] = None

    type_name: ClassVar[str] = "integer"

    INTEGER_PATTERN: ClassVar[re.Pattern] = re.compile(r"^[+-]?[0-9]+$")

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if value is None:
            return None

        text = str(value).strip()
        if not self.INTEGER_PATTERN.match(text):
            return self.invalid(context, "integer_argument_invalid", value)
        number = int(text)

        if self.max is not None and number >= self.max:
            return self.invalid(context, "integer_argument_too_high", value)
        if self.min is not None and number <= self.min:
            return self.invalid(context, "integer_argument_too_low", value)
        return number


@dataclass
class BooleanArgument(Argument):
    """Yes/no value. Lenient mode ignores case and knows a few more words."""

    lenient: bool = True

    type_name: ClassVar[str] = "boolean"

    TRUE_TOKENS: ClassVar[frozenset[str]] = frozenset({"y", "yes", "true", "1"})
    FALSE_TOKENS: ClassVar[frozenset[str]] = frozenset({"n", "no", "false", "0"})
    LENIENT_TRUE_TOKENS: ClassVar[frozenset[str]] = frozenset({"on", "t", "enable", "enabled", "ok"})
    LENIENT_FALSE_TOKENS: ClassVar[frozenset[str]] = frozenset({"off", "f", "disable", "disabled"})

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if value is None:
            return None

        token = str(value).strip()
        if self.lenient:
            token = token.lower()
            if token in self.TRUE_TOKENS or token in self.LENIENT_TRUE_TOKENS:
                return True
            if token in self.FALSE_TOKENS or token in self.LENIENT_FALSE_TOKENS:
                return False
        elif token in self.TRUE_TOKENS:
            return True
        elif token in self.FALSE_TOKENS:
            return False
        return self.invalid(context, "boolean_argument_invalid", value)


# humanfriendly counts a year as 52 weeks; long units use the Julian year
DAYS_PER_YEAR = 365.25

# Units humanfriendly doesn't know about, in years
_LONG_UNITS = {
    "decade": 10,
    "decades": 10,
    "dec": 10,
    "century": 100,
    "centuries": 100,
    "cen": 100,
    "millennium": 1000,
    "millennia": 1000,
    "millenniums": 1000,
    "mil": 1000,
}
_DURATION_PART = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*,?")


@dataclass
class DurationArgument(Argument):
    """A duration such as ``5m`` or ``1h 30m``, resolved to milliseconds."""

    type_name: ClassVar[str] = "duration"

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if value is None:
            return None

        try:
            return parse_duration(str(value))
        except InvalidTimespan:
            return self.invalid(context, "duration_argument_invalid", value)


def parse_duration(text: str) -> float:
    """Parse one or more ``<number><unit>`` parts into milliseconds."""
    seconds = 0.0
    position = 0
    text = text.strip()
    if not text:
        raise InvalidTimespan("Empty duration")

    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if not match or match.end() == position:
            raise InvalidTimespan(f"Unrecognized duration: {text!r}")
        number, unit = match.groups()
        years = _LONG_UNITS.get(unit.lower())
        if not unit:
            # A bare number is milliseconds
            seconds += parse_timespan(f"{number}ms")
        elif years is not None:
            seconds += parse_timespan(f"{float(number) * years * DAYS_PER_YEAR} days")
        else:
            seconds += parse_timespan(f"{number}{unit}")
        position = match.end()

    return seconds * 1000


@dataclass
class ColorArgument(Argument):
    """A CSS color name or hex literal, resolved to an ``IntegerRGB``."""

    type_name: ClassVar[str] = "color"

    HEX_PATTERN: ClassVar[re.Pattern] = re.compile(r"^#?(?:[0-9A-Fa-f]{3}){1,2}$")

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if value is None:
            return None

        text = str(value).strip()
        try:
            if self.HEX_PATTERN.match(text):
                return webcolors.hex_to_rgb(text if text.startswith("#") else f"#{text}")
            return webcolors.name_to_rgb(text.lower())
        except ValueError:
            return self.invalid(context, "color_argument_invalid", value)


@dataclass
class URLArgument(StringArgument):
    """An absolute URL, resolved to its ``urllib.parse`` split result."""

    type_name: ClassVar[str] = "url"

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        text = super().get_value(value, context, registry)
        if text is None or isinstance(text, InvalidArgumentError):
            return text

        try:
            parts = urlsplit(text)
        except ValueError:
            return self.invalid(context, "url_argument_invalid", value)
        if not parts.scheme or not parts.netloc:
            return self.invalid(context, "url_argument_invalid", value)
        return parts


@dataclass
class BytesArgument(Argument):
    """A size such as ``10kb``, resolved to a number of bytes (1 kb = 1024)."""

    type_name: ClassVar[str] = "bytes"

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if value is None:
            return None

        try:
            return parse_size(str(value), binary=True)
        except InvalidSize:
            return self.invalid(context, "bytes_argument_invalid", value)


class _PrefixedNameMixin:
    """Shared checks for reddit-style names with an optional ``x/`` prefix."""

    prefix: ClassVar[str]
    name_pattern: ClassVar[re.Pattern]
    code_prefix: ClassVar[str]
    min_name_length: ClassVar[int] = 3
    max_name_length: ClassVar[int] = 20

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        text = super().get_value(value, context, registry)
        if text is None or isinstance(text, InvalidArgumentError):
            return text

        if text[: len(self.prefix)].lower() == self.prefix:
            text = text[len(self.prefix):]

        if not self.name_pattern.match(text):
            return self.invalid(context, f"{self.code_prefix}_argument_invalid", value)
        if len(text) < self.min_name_length:
            return self.invalid(context, f"{self.code_prefix}_argument_too_short", value)
        if len(text) > self.max_name_length:
            return self.invalid(context, f"{self.code_prefix}_argument_too_long", value)
        return text


@dataclass
class SubredditArgument(_PrefixedNameMixin, StringArgument):
    """A subreddit name, with or without ``r/``."""

    type_name: ClassVar[str] = "subreddit"
    prefix: ClassVar[str] = "r/"
    name_pattern: ClassVar[re.Pattern] = re.compile(r"^[A-Za-z0-9]\w+$", re.ASCII)
    code_prefix: ClassVar[str] = "subreddit"


@dataclass
class UserArgument(_PrefixedNameMixin, StringArgument):
    """A username, with or without ``u/``."""

    type_name: ClassVar[str] = "user"
    prefix: ClassVar[str] = "u/"
    name_pattern: ClassVar[re.Pattern] = re.compile(r"^[\w-]+$", re.ASCII)
    code_prefix: ClassVar[str] = "user"


@dataclass
class CommandReferenceArgument(Argument):
    """The name of a registered command."""

    allow_alias: bool = True

    type_name: ClassVar[str] = "command"

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if value is None:
            return None

        command = registry.get(value) if registry is not None else None
        if command is None:
            return self.invalid(context, "command_argument_nonexistent", value)
        if not self.allow_alias and command.name != command.original_name:
            return self.invalid(context, "command_argument_not_original", value)
        return command


@dataclass
class CustomArgument(Argument):
    """Delegates coercion to ``custom(value, context, registry)``.

    The callback returns the coerced value. It rejects the token by raising
    ``ValueError`` (reported as ``custom_argument_invalid``) or by returning
    an error built with :meth:`invalid` when it holds the argument.
    """

    custom: Optional[Callable[..., Any]] = None

    type_name: ClassVar[str] = "custom"

    def get_value(self, value: Any, context: Context = None, registry: Any = None) -> Any:
        if self.custom is None:
            return value
        try:
            return self.custom(value, context, registry)
        except ValueError:
            return self.invalid(context, "custom_argument_invalid", value)


ARGUMENT_TYPES: dict[str, type[Argument]] = {
    "generic": Argument,
    "string": StringArgument,
    "integer": IntegerArgument,
    "boolean": BooleanArgument,
    "duration": DurationArgument,
    "color": ColorArgument,
    "url": URLArgument,
    "bytes": BytesArgument,
    "subreddit": SubredditArgument,
    "user": UserArgument,
    "command": CommandReferenceArgument,
    "custom": CustomArgument,
}


def resolve_argument(descriptor: Any) -> Argument:
    """Turn an argument descriptor into an :class:`Argument`.

    Mappings are resolved through :data:`ARGUMENT_TYPES` by their ``type``;
    unknown type names fall back to ``string``.
    """
    if isinstance(descriptor, Argument):
        return descriptor
    if not isinstance(descriptor, Mapping):
        raise CommandError(
            f"Arguments must be mappings or Argument instances, not {type(descriptor).__name__}.",
            "INVALID_ARGUMENT_TYPE",
        )

    type_name = descriptor.get("type", "string")
    argument_class = ARGUMENT_TYPES.get(type_name)
    if argument_class is None:
        logger.debug(f"Unknown argument type {type_name!r}, using string")
        argument_class = StringArgument

    known = {field.name for field in dataclasses.fields(argument_class)}
    kwargs = {}
    for name, value in descriptor.items():
        name = _FIELD_ALIASES.get(name, name)
        if name in known:
            kwargs[name] = value

    if "key" not in kwargs:
        raise CommandError("Arguments must have a key.", "INVALID_ARGUMENT_TYPE")
    return argument_class(**kwargs)
