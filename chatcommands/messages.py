"""Built-in English messages for argument validation and dispatch."""

from typing import Any, Optional

DEFAULT_MESSAGES: dict[str, str] = {
    # Generic pipeline
    "argument_invalid": "The value `{value}` is not a valid {type_name} for `{key}`.",
    "argument_required": "The argument `{key}` is required.",
    "argument_unavailable_choice": "`{value}` is not an option for `{key}`. Choose one of: {choices}.",
    "no_permission": "You don't have permission to use this command.",
    # String
    "string_argument_regexp_fail": "`{value}` does not have the expected format for `{key}`.",
    "string_argument_too_long": "`{key}` must be shorter than {max_length} characters.",
    "string_argument_too_short": "`{key}` must be at least {min_length} characters long.",
    # Integer
    "integer_argument_invalid": "`{value}` is not a whole number.",
    "integer_argument_too_high": "`{key}` must be lower than {max}.",
    "integer_argument_too_low": "`{key}` must be higher than {min}.",
    # Other types
    "boolean_argument_invalid": "`{value}` is not yes or no.",
    "duration_argument_invalid": "`{value}` is not a duration.",
    "color_argument_invalid": "`{value}` is not a color.",
    "url_argument_invalid": "`{value}` is not a valid URL.",
    "bytes_argument_invalid": "`{value}` is not a size in bytes.",
    "subreddit_argument_invalid": "`{value}` is not a valid subreddit name.",
    "subreddit_argument_too_short": "Subreddit names are at least 3 characters long.",
    "subreddit_argument_too_long": "Subreddit names are at most 20 characters long.",
    "user_argument_invalid": "`{value}` is not a valid username.",
    "user_argument_too_short": "Usernames are at least 3 characters long.",
    "user_argument_too_long": "Usernames are at most 20 characters long.",
    "command_argument_nonexistent": "There is no command named `{value}`.",
    "command_argument_not_original": "`{value}` is an alias; use the command's original name.",
    "custom_argument_invalid": "`{value}` is not a valid value for `{key}`.",
    # Type names
    "argument_type_generic": "value",
    "argument_type_string": "text",
    "argument_type_integer": "whole number",
    "argument_type_boolean": "yes/no value",
    "argument_type_duration": "duration",
    "argument_type_color": "color",
    "argument_type_url": "URL",
    "argument_type_bytes": "size",
    "argument_type_subreddit": "subreddit",
    "argument_type_user": "username",
    "argument_type_command": "command",
    "argument_type_custom": "value",
}


class _Fields(dict):
    def __missing__(self, key: str) -> str:
        return "?"


def default_localize(code: str, argument: Any = None, value: Any = None, type_name: Optional[str] = None) -> Optional[str]:
    """Format the built-in template for ``code``, or return None if there is none."""
    template = DEFAULT_MESSAGES.get(code)
    if template is None:
        return None

    fields = _Fields(value=value, type_name=type_name or "value")
    if argument is not None:
        fields.update(
            key=getattr(argument, "key", "?"),
            choices=", ".join(str(choice) for choice in getattr(argument, "choices", None) or []),
        )
        for name in ("min", "max", "min_length", "max_length"):
            bound = getattr(argument, name, None)
            if bound is not None:
                fields[name] = bound
    return template.format_map(fields)
