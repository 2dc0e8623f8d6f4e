from pydantic import Field
from pydantic_settings import BaseSettings


class ChatCommandSettings(BaseSettings):
    log_level: str = Field(default="INFO", description="Logging level")

    # Dispatch behaviour
    permission_prefix: str = Field(
        default="commands", description="First segment of every command permission string"
    )
    default_replaces_failure: bool = Field(
        default=True,
        description="Replace a value that failed to coerce with the argument's default",
    )
    camel_case_keys: bool = Field(
        default=True, description="Also expose parsed values under lowerCamelCase keys"
    )

    # Command loading
    command_directories: list[str] = Field(
        default=[], description="Directories to load command definitions from"
    )
    recursive_load: bool = Field(default=True, description="Load command files in subdirectories")

    class Config:
        env_prefix = "CHATCOMMANDS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = ChatCommandSettings()
