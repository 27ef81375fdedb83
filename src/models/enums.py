"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Profile roles."""

    ADMIN = "admin"
    USER = "user"


class Language(str, Enum):
    """Languages a snippet can be written in."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    JAVA = "java"
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    GO = "go"
    RUST = "rust"
    PHP = "php"
    RUBY = "ruby"
    SWIFT = "swift"
    KOTLIN = "kotlin"
    SQL = "sql"
    HTML = "html"
    CSS = "css"
    JSON = "json"
    YAML = "yaml"
    MARKDOWN = "markdown"
    SHELL = "shell"

    @classmethod
    def values(cls) -> list[str]:
        """All language identifiers in declaration order."""
        return [language.value for language in cls]
