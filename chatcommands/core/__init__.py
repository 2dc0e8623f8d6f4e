from .dispatcher import CommandDispatcher
from .loader import CommandLoader
from .tokenizer import camel_case, split_arguments, split_command

__all__ = ["CommandDispatcher", "CommandLoader", "camel_case", "split_arguments", "split_command"]
