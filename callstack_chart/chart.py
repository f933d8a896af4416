"""
Module with classes that define a call stack chart: the options describing a single function
call and the arguments passed to it, validated from a plain mapping of options.
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# expected type of each recognized option, checked in this order
OPTION_TYPES: dict[str, str] = {
    "id": "string",
    "title": "string",
    "returnValueSize": "number",
    "returnValueOnCallStack": "boolean",
    "callArgs": "object",
    "linkRegister": "boolean",
    "padding": "number",
    "yMax": "number",
}


class ConfigValidationError(ValueError):
    """Error type for chart options that do not match the expected shape."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


def _has_type(value: Any, type_name: str) -> bool:
    match type_name:
        case "string":
            return isinstance(value, str)
        case "number":  # bool is an int subclass but never a size
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        case "boolean":
            return isinstance(value, bool)
        case "object":
            return isinstance(value, (list, tuple))
    raise ValueError(f'Unknown option type "{type_name}"')


def _snake_case(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)


def validate_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """
    Check each recognized option against its expected type and return them keyed by their camelCase names.
    Options can be given by their camelCase or snake_case names, a missing option counts as a mismatch.
    Raises ConfigValidationError naming the first mismatched option.
    """
    if not isinstance(options, Mapping):
        raise ConfigValidationError("options", "Expected options to be a mapping of option names to values")
    values = {}
    for name, type_name in OPTION_TYPES.items():
        value = options.get(name, options.get(_snake_case(name)))
        if not _has_type(value, type_name):
            raise ConfigValidationError(name, f"Expected {name} to be of type {type_name}")
        values[name] = value
    return values


class CallArgument(BaseModel, frozen=True, strict=True, extra="forbid"):
    """Represents an argument passed to the called function, stored on its stack frame."""

    name: str
    size: int = Field(ge=0)
    color: str

    @classmethod
    def from_arg_spec(cls, index: int, arg_spec: "Mapping[str, Any] | CallArgument") -> "CallArgument":
        """Validate the call argument at the given position, naming the offending field on failure."""
        if isinstance(arg_spec, CallArgument):
            return arg_spec
        if not isinstance(arg_spec, Mapping):
            raise ConfigValidationError(f"callArgs[{index}]", f"Expected callArgs[{index}] to be of type object")
        try:
            return cls.model_validate(dict(arg_spec))
        except ValidationError as exc:
            error = exc.errors()[0]
            field = f"callArgs[{index}]" + "".join(f".{loc}" for loc in error["loc"])
            raise ConfigValidationError(field, f"Invalid {field}: {error['msg']}") from exc


class ChartConfig(BaseModel, frozen=True, strict=True, populate_by_name=True):
    """
    Represents the options for drawing a single call stack chart: the identifier of the target
    container, the chart title, the return value and arguments of the call, whether the link
    register is saved and the amount of padding in the frame.
    """

    id: str
    title: str
    return_value_size: int | float = Field(alias="returnValueSize")
    return_value_on_call_stack: bool = Field(alias="returnValueOnCallStack")
    call_args: tuple[CallArgument, ...] = Field(alias="callArgs", strict=False)  # list or tuple of arguments
    link_register: bool = Field(alias="linkRegister")
    padding: int | float
    y_max: int | float = Field(alias="yMax")

    @classmethod
    def from_options(cls, options: "Mapping[str, Any] | ChartConfig") -> "ChartConfig":
        """Validate a mapping of chart options, camelCase or snake_case, and build the chart config from it."""
        if isinstance(options, ChartConfig):
            return options
        values = validate_options(options)
        values["callArgs"] = tuple(
            CallArgument.from_arg_spec(index, arg_spec) for index, arg_spec in enumerate(values["callArgs"])
        )
        logger.debug("validated options for chart %s", values["id"])
        return cls.model_validate(values)
